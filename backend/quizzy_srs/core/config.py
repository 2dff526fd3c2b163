from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


class SRSConfig(BaseModel):
    storage_key: str = Field("@quizzy_srs_data", alias="storage_key")
    session_size: int = Field(10, alias="session_size")
    quizzes_path: str = Field("", alias="quizzes_path")


class StorageConfig(BaseModel):
    backend: str = Field("sqlite", alias="backend")  # sqlite|memory


class LoggingConfig(BaseModel):
    level: str = Field("INFO", alias="level")
    file: str = Field("./backend/logs/app.log", alias="file")


class DatabaseConfig(BaseModel):
    url: str = Field("sqlite:///./backend/data/srs.db", alias="url")


class SecurityConfig(BaseModel):
    cors_origins: list[str] = Field(
        default=["http://localhost:8081", "http://127.0.0.1:8081"],
        alias="cors_origins",
    )


class AppConfig(BaseModel):
    srs: SRSConfig = SRSConfig()
    storage: StorageConfig = StorageConfig()
    logging: LoggingConfig = LoggingConfig()
    database: DatabaseConfig = DatabaseConfig()
    security: SecurityConfig = SecurityConfig()


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with path.open("r", encoding="utf-8") as file:
        data = yaml.safe_load(file) or {}
    return data


@lru_cache
def get_config() -> AppConfig:
    candidates = [
        Path(os.getenv("APP_CONFIG_PATH", "")),
        Path("config/config.yaml"),
        Path("backend/config/config.yaml"),
    ]

    config_path = None
    for path in candidates:
        if path and path.exists() and path.is_file():
            config_path = path
            break

    if not config_path:
        if Path("config/config.example.yaml").exists():
            config_path = Path("config/config.example.yaml")
        elif Path("backend/config/config.example.yaml").exists():
            config_path = Path("backend/config/config.example.yaml")
        else:
            raise FileNotFoundError("Config file not found in config/config.yaml or backend/config/config.yaml")

    raw = _load_yaml(config_path)
    return AppConfig(**raw)
