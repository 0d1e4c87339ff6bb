import logging
import uuid
from typing import Any, List, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from errors import ValidationError
from models import Base, StorageEntry
from schemas import JobDescription

logger = logging.getLogger(__name__)

JOB_DESCRIPTIONS_KEY = "jobDescriptions"
THEME_KEY = "theme"
THEMES = ("dark", "light")


class LocalStorage:
    """Key/value store: each collection is one JSON document under a fixed key."""

    def __init__(self, engine: Engine):
        self.engine = engine
        self.Session = sessionmaker(bind=engine, autoflush=False, future=True)
        Base.metadata.create_all(engine)

    @classmethod
    def from_url(cls, url: str) -> "LocalStorage":
        return cls(create_engine(url, future=True))

    def get(self, key: str, default: Any = None) -> Any:
        try:
            with self.Session() as s:
                entry = s.get(StorageEntry, key)
                return default if entry is None or entry.value is None else entry.value
        except ValueError as e:
            logger.error(f"Failed to load '{key}' from local storage: {e}")
            return default

    def set(self, key: str, value: Any) -> None:
        with self.Session() as s:
            s.merge(StorageEntry(key=key, value=value))
            s.commit()


class JobDescriptionStore:
    def __init__(self, storage: LocalStorage):
        self.storage = storage

    def list(self) -> List[JobDescription]:
        raw = self.storage.get(JOB_DESCRIPTIONS_KEY, [])
        if not isinstance(raw, list):
            logger.error(f"Ignoring corrupt '{JOB_DESCRIPTIONS_KEY}' entry")
            return []
        jobs = []
        for item in raw:
            try:
                jobs.append(JobDescription.model_validate(item))
            except Exception as e:
                logger.warning(f"Skipping unreadable job description: {e}")
        return jobs

    def _save(self, jobs: List[JobDescription]) -> None:
        self.storage.set(JOB_DESCRIPTIONS_KEY, [j.model_dump(by_alias=True) for j in jobs])

    def add(self, title: str, description: str) -> JobDescription:
        title, description = (title or "").strip(), (description or "").strip()
        if not title or not description:
            raise ValidationError("Job title and description are both required.")
        job = JobDescription(id=str(uuid.uuid4()), title=title, description=description)
        self._save([job] + self.list())  # newest first
        logger.info(f"Saved job description {job.id} ({job.title})")
        return job

    def get(self, job_id: str) -> Optional[JobDescription]:
        return next((j for j in self.list() if j.id == job_id), None)

    def delete(self, job_id: str) -> bool:
        jobs = self.list()
        remaining = [j for j in jobs if j.id != job_id]
        if len(remaining) == len(jobs):
            return False
        self._save(remaining)
        return True


class ThemePreference:
    def __init__(self, storage: LocalStorage, default: str = "light"):
        self.storage = storage
        self.default = default

    def get(self) -> str:
        value = self.storage.get(THEME_KEY)
        return value if value in THEMES else self.default

    def set(self, value: str) -> str:
        value = (value or "").strip().lower()
        if value not in THEMES:
            raise ValidationError(f"Unknown theme '{value}'. Use 'dark' or 'light'.")
        self.storage.set(THEME_KEY, value)
        return value
