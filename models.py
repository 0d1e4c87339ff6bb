from sqlalchemy import Column, String, Text, TypeDecorator
from sqlalchemy.orm import declarative_base
import json

Base = declarative_base()


class JSONType(TypeDecorator):
    """JSON serialized into a text column; behaves the same on SQLite and elsewhere."""
    impl = Text
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return json.dumps(value)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return json.loads(value)


class StorageEntry(Base):
    """One named value of the persisted local state (job descriptions, theme)."""
    __tablename__ = "local_storage"
    key = Column(String, primary_key=True)
    value = Column(JSONType)
