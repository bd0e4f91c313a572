from dotenv import load_dotenv
from dataclasses import dataclass
from typing import Optional
from pathlib import Path
import json
import os

from ogcheck.constants import (
    DEFAULT_TIMEOUT_MS,
    DEFAULT_USER_AGENT,
    OG_DESCRIPTION_MAX_LENGTH,
    OG_IMAGE_MIN_DIMENSION,
    OG_TITLE_MAX_LENGTH,
)

load_dotenv()  # Loads variables from .env file


@dataclass
class Config:
    """Configuration for a check run."""
    user_agent: str = DEFAULT_USER_AGENT
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    log_level: str = "WARNING"
    log_file: Optional[str] = None

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables.

        Returns:
            Config: Configuration instance with values from environment
        """
        try:
            timeout_ms = int(os.getenv("OG_CHECK_TIMEOUT_MS", str(DEFAULT_TIMEOUT_MS)))
        except ValueError:
            timeout_ms = DEFAULT_TIMEOUT_MS

        return cls(
            user_agent=os.getenv("OG_CHECK_USER_AGENT", DEFAULT_USER_AGENT),
            timeout_ms=timeout_ms,
            log_level=os.getenv("LOG_LEVEL", "WARNING"),
            log_file=os.getenv("LOG_FILE"),
        )


@dataclass
class ValidationThresholds:
    """Configurable thresholds for social meta validation."""

    og_title_max_length: int = OG_TITLE_MAX_LENGTH
    og_description_max_length: int = OG_DESCRIPTION_MAX_LENGTH
    og_image_min_dimension: int = OG_IMAGE_MIN_DIMENSION  # pixels, both axes

    @classmethod
    def from_env(cls) -> "ValidationThresholds":
        """Load thresholds from environment variables.

        Environment variables should be prefixed with OG_CHECK_THRESHOLD_
        e.g., OG_CHECK_THRESHOLD_OG_TITLE_MAX_LENGTH=70

        Returns:
            ValidationThresholds with values from environment
        """
        thresholds = cls()
        prefix = "OG_CHECK_THRESHOLD_"

        for field_name in thresholds.__dataclass_fields__:
            env_key = f"{prefix}{field_name.upper()}"
            env_value = os.getenv(env_key)

            if env_value is not None:
                try:
                    setattr(thresholds, field_name, int(env_value))
                except ValueError:
                    pass  # Keep default if conversion fails

        return thresholds

    @classmethod
    def from_file(cls, path: str) -> "ValidationThresholds":
        """Load thresholds from a JSON configuration file.

        Args:
            path: Path to JSON configuration file

        Returns:
            ValidationThresholds with values from file
        """
        thresholds = cls()
        file_path = Path(path)

        if not file_path.exists():
            return thresholds

        with open(file_path, 'r') as f:
            config = json.load(f)

        threshold_config = config.get('thresholds', config) if isinstance(config, dict) else None
        if not isinstance(threshold_config, dict):
            raise ValueError(f"{path}: expected a JSON object of thresholds")

        for field_name in thresholds.__dataclass_fields__:
            if field_name in threshold_config:
                setattr(thresholds, field_name, int(threshold_config[field_name]))

        return thresholds

    def to_dict(self) -> dict:
        """Convert thresholds to dictionary.

        Returns:
            Dictionary of all threshold values
        """
        return {
            field_name: getattr(self, field_name)
            for field_name in self.__dataclass_fields__
        }


# Global default thresholds instance
default_thresholds = ValidationThresholds()
