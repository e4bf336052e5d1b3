"""Configuration settings for transmission-relay.

Environment variables with the same name as a field override its default.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

MEBIBYTE = 1024 * 1024


@dataclass
class Settings:
    """Server and renderer configuration."""

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8080
    DEBUG: bool = False

    # CORS
    CORS_ORIGINS: list[str] = field(default_factory=lambda: ["*"])

    # Persisted issue document
    DATA_DIR: str = "./data"
    DATA_FILENAME: str = "current_magazine_data.json"

    # Uploads
    MAX_UPLOAD_BYTES: int = 5 * MEBIBYTE

    # Presentation
    DEFAULT_TEMPLATE: str = "standard-grid"
    ENTRANCE_DELAY: str = "0.1s"

    def __post_init__(self):
        """Load from environment variables"""
        for key in self.__dataclass_fields__:
            env_value = os.getenv(key)
            if env_value is not None:
                field_type = self.__dataclass_fields__[key].type
                if field_type == bool:
                    setattr(self, key, env_value.lower() in ("true", "1", "yes"))
                elif field_type == int:
                    setattr(self, key, int(env_value))
                elif field_type == list[str]:
                    setattr(self, key, env_value.split(","))
                else:
                    setattr(self, key, env_value)

    @property
    def data_file_path(self) -> Path:
        return Path(self.DATA_DIR) / self.DATA_FILENAME
