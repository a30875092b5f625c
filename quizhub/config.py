"""
Configuration loader
"""
import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, model_validator


DEFAULT_CONFIG_PATH = "config/event.yaml"
CONFIG_ENV_VAR = "QUIZHUB_CONFIG"


class Settings(BaseModel):
    """Event server settings"""
    data_dir: str = "data"
    teams_file: str = "teams.json"
    submissions_file: str = "submissions.json"
    default_round_label: str = "round1"
    default_duration_seconds: float = Field(default=300, gt=0)
    marks_min: Optional[float] = None   # None = unbounded
    marks_max: Optional[float] = None
    static_dir: str = "public"
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 3000

    @model_validator(mode="after")
    def check_marks_range(self):
        if (
            self.marks_min is not None
            and self.marks_max is not None
            and self.marks_min > self.marks_max
        ):
            raise ValueError("marks_min must not exceed marks_max")
        return self

    @property
    def teams_path(self) -> Path:
        return Path(self.data_dir) / self.teams_file

    @property
    def submissions_path(self) -> Path:
        return Path(self.data_dir) / self.submissions_file


def load_settings(config_path: Optional[str] = None) -> Settings:
    """
    Load settings from YAML file

    Args:
        config_path: Path to config file (default: $QUIZHUB_CONFIG or config/event.yaml)

    Returns:
        Settings object, all defaults if the file does not exist
    """
    path = Path(config_path or os.environ.get(CONFIG_ENV_VAR, DEFAULT_CONFIG_PATH))

    if not path.exists():
        return Settings()

    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping: {path}")

    return Settings(**data)
