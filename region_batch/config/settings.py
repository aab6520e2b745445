"""Configuration management for region-batch.

Loads settings from environment variables with sensible defaults.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class StoreConfig:
    """Region store configuration."""
    backend: str = "sqlite"  # "memory", "sqlite"
    project_dir: str = "."  # database lives in <project_dir>/.region_batch/

    @property
    def project_path(self) -> Path:
        return Path(self.project_dir)

    @classmethod
    def from_env(cls) -> "StoreConfig":
        return cls(
            backend=os.getenv("REGION_BATCH_STORE", "sqlite"),
            project_dir=os.getenv("REGION_BATCH_PROJECT_DIR", "."),
        )


@dataclass
class AppConfig:
    """Top-level application configuration."""
    store: StoreConfig = field(default_factory=StoreConfig)
    default_world: str = "world"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "AppConfig":
        return cls(
            store=StoreConfig.from_env(),
            default_world=os.getenv("REGION_BATCH_DEFAULT_WORLD", "world"),
            log_level=os.getenv("REGION_BATCH_LOG_LEVEL", "INFO").upper(),
        )
