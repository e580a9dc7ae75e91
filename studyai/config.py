"""Environment-driven settings shared by the CLIs and agent tools."""
import os
from dataclasses import dataclass
from pathlib import Path

# Project root
PROJECT_ROOT = Path(__file__).parent.parent
STATE_DIR = PROJECT_ROOT / "storage" / "state"

DEFAULT_USER_ID = "localUser123"
DEFAULT_MODEL = "gemini-2.5-flash"


@dataclass
class Settings:
    """Runtime settings (read from the environment, .env supported by the CLIs)."""
    user_id: str
    storage_path: Path
    model: str
    api_key: str | None


def get_settings() -> Settings:
    return Settings(
        user_id=os.getenv("STUDYAI_USER_ID") or DEFAULT_USER_ID,
        storage_path=Path(os.getenv("STUDYAI_STORAGE") or STATE_DIR / "local_storage.json"),
        model=os.getenv("STUDYAI_MODEL") or DEFAULT_MODEL,
        api_key=os.getenv("GOOGLE_API_KEY"),
    )
