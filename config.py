import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel

DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_API_URL = "http://localhost:8000"


class Settings(BaseModel):
    """Runtime configuration, passed explicitly to the components that need it."""

    gemini_api_key: Optional[str] = None
    model_name: str = DEFAULT_MODEL
    gemini_base_url: str = DEFAULT_BASE_URL
    llm_timeout: Optional[float] = None  # None -> provider/network default
    base_dir: str = "data"
    database_url: Optional[str] = None
    api_url: str = DEFAULT_API_URL

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()
        # Hugging Face Spaces only allow writes under /tmp
        is_hf = os.environ.get("SPACE_ID") is not None
        base_dir = os.getenv("BASE_DIR", "/tmp/data" if is_hf else "data")
        timeout = os.getenv("LLM_TIMEOUT")
        return cls(
            gemini_api_key=os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY"),
            model_name=os.getenv("MODEL_NAME", DEFAULT_MODEL),
            gemini_base_url=os.getenv("GEMINI_BASE_URL", DEFAULT_BASE_URL),
            llm_timeout=float(timeout) if timeout else None,
            base_dir=base_dir,
            database_url=os.getenv("DATABASE_URL"),
            api_url=os.getenv("API_URL", DEFAULT_API_URL),
        )

    @property
    def resolved_database_url(self) -> str:
        if self.database_url:
            return self.database_url
        return f"sqlite:///{os.path.join(self.base_dir, 'app.db')}"
