"""Configuration management for litreview."""
import os
from dataclasses import dataclass
from typing import Optional
from dotenv import load_dotenv

from .exceptions import ConfigurationError

SUPPORTED_LOCALES = ("zh", "en")


@dataclass
class Config:
    """litreview configuration.

    Attributes:
        store_path: JSON file holding the persisted field and review blobs
        library_path: BibTeX file used as the item library (optional)
        locale: Language for headers, default field names and messages ('zh', 'en')
        export_dir: Directory exports are written to when no path is given
        log_level: Logging level name
    """

    # Storage
    store_path: str = os.path.join("~", ".litreview", "prefs.json")
    library_path: Optional[str] = None

    # Presentation
    locale: str = "zh"
    export_dir: str = "."

    # Logging
    log_level: str = "WARNING"

    def __post_init__(self):
        if self.locale not in SUPPORTED_LOCALES:
            raise ConfigurationError(
                f"Unsupported locale: {self.locale} (expected one of {', '.join(SUPPORTED_LOCALES)})"
            )

    @property
    def resolved_store_path(self) -> str:
        """Store path with ``~`` expanded."""
        return os.path.expanduser(self.store_path)

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "Config":
        """Load configuration from environment variables.

        Args:
            env_file: Path to .env file (optional)

        Returns:
            Config instance with values from environment
        """
        if env_file:
            load_dotenv(env_file)
        else:
            load_dotenv()

        return cls(
            store_path=os.getenv(
                "LITREVIEW_STORE_PATH", os.path.join("~", ".litreview", "prefs.json")
            ),
            library_path=os.getenv("LITREVIEW_LIBRARY") or None,
            locale=os.getenv("LITREVIEW_LOCALE", "zh"),
            export_dir=os.getenv("LITREVIEW_EXPORT_DIR", "."),
            log_level=os.getenv("LITREVIEW_LOG_LEVEL", "WARNING"),
        )

    @classmethod
    def from_dict(cls, config_dict: dict) -> "Config":
        """Load configuration from dictionary.

        Args:
            config_dict: Dictionary with configuration values

        Returns:
            Config instance
        """
        return cls(**{k: v for k, v in config_dict.items() if k in cls.__annotations__})
