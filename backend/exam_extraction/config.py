# exam_extraction/config.py
"""
Application settings for the Function host and local scripts.

Values come from the process environment; a `.env.local` file next to the
backend package fills in anything the environment does not set. Extraction
tuning (models, chunking, retries) lives in extractors/base/config.py.
"""

import os
import logging
from pathlib import Path
from typing import Dict, Optional

logger = logging.getLogger(__name__)

_TRUE_VALUES = ("true", "1", "yes")
_DEFAULT_ENV_FILE = Path(__file__).resolve().parent.parent / ".env.local"


def read_env_file(path: Path) -> Dict[str, str]:
    """Parse KEY=VALUE lines, skipping blanks and # comments."""
    values = {}
    with open(path) as f:
        for raw in f:
            line = raw.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            key, value = line.split("=", 1)
            values[key.strip()] = value.strip()
    return values


class Config:
    """Environment-backed settings, read lazily through properties."""

    def __init__(self, env_file: Optional[Path] = None):
        self.env_file = env_file or _DEFAULT_ENV_FILE
        if self.env_file.exists():
            try:
                for key, value in read_env_file(self.env_file).items():
                    os.environ.setdefault(key, value)
            except OSError as e:
                logger.warning(f"Could not load {self.env_file.name}: {e}")

    @staticmethod
    def _get(name: str, default: str = "") -> str:
        return os.environ.get(name, default)

    # Database
    @property
    def database_url(self) -> str:
        # DB_CONNECTION_STRING is the name used in Function app settings
        return self._get("DATABASE_URL") or self._get("DB_CONNECTION_STRING")

    # LLM
    @property
    def llm_provider(self) -> str:
        return self._get("LLM_PROVIDER", "openai").lower()

    @property
    def is_azure(self) -> bool:
        return self.llm_provider == "azure"

    @property
    def llm_api_key(self) -> str:
        if self.is_azure:
            return self._get("OPENAI_KEY")
        return self._get("LLM_API_KEY") or self._get("OPENAI_API_KEY")

    @property
    def llm_endpoint(self) -> str:
        """Azure endpoint, or the base URL of an OpenAI-compatible gateway."""
        return self._get("OPENAI_ENDPOINT") if self.is_azure else self._get("LLM_BASE_URL")

    # Runtime
    @property
    def dry_run(self) -> bool:
        """Return results without touching the database."""
        return self._get("DRY_RUN", "false").lower() in _TRUE_VALUES

    @property
    def correction_history_limit(self) -> int:
        return int(self._get("CORRECTION_HISTORY_LIMIT", "20"))

    @property
    def log_level(self) -> str:
        return self._get("LOG_LEVEL", "INFO").upper()

    def validate(self) -> tuple[bool, list[str]]:
        """
        Check that required settings are present.

        Returns:
            Tuple of (is_valid, list of missing keys)
        """
        missing = []

        if not self.dry_run and not self.database_url:
            missing.append("DATABASE_URL or DB_CONNECTION_STRING")

        if not self.llm_api_key:
            missing.append("OPENAI_KEY" if self.is_azure else "LLM_API_KEY")
        if self.is_azure and not self.llm_endpoint:
            missing.append("OPENAI_ENDPOINT")

        return len(missing) == 0, missing

    def print_config(self, hide_secrets: bool = True):
        """Print current settings (for debugging)."""
        rows = [
            ("Dry Run", self.dry_run, False),
            ("Log Level", self.log_level, False),
            ("Database URL", self.database_url, True),
            ("LLM Provider", self.llm_provider, False),
            ("LLM Endpoint", self.llm_endpoint, False),
            ("LLM Key", self.llm_api_key, True),
            ("Correction History", self.correction_history_limit, False),
        ]
        print("=" * 60)
        print("Exam extraction settings:")
        print("=" * 60)
        for label, value, secret in rows:
            print(f"{label}: {self._mask(value) if secret and hide_secrets else value}")
        print("=" * 60)

    @staticmethod
    def _mask(value: str, show_chars: int = 4) -> str:
        if not value or len(value) <= show_chars * 2:
            return "***"
        return f"{value[:show_chars]}...{value[-show_chars:]}"


# Global config instance
config = Config()
