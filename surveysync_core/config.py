#!/usr/bin/env python3
from dataclasses import dataclass
import os
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ["true", "1", "yes"]


@dataclass
class Config:
    """Application configuration"""
    workspace: Path = Path(os.getenv("SURVEYSYNC_WORKSPACE", "./workspace"))
    enable_debug: bool = _env_flag("SURVEYSYNC_DEBUG", "false")
    headless: bool = _env_flag("SURVEYSYNC_HEADLESS", "true")
    api_port: int = int(os.getenv("SURVEYSYNC_API_PORT", "8010"))

    # Grid rows: keep the flat 80 / float 20 split unless normalisation is requested
    normalize_grid_rows: bool = _env_flag("SURVEYSYNC_NORMALIZE_GRID", "false")

    # "position" or "fingerprint"
    reconcile_key: str = os.getenv("SURVEYSYNC_RECONCILE_KEY", "position").lower()

    markers_file: Optional[str] = os.getenv("SURVEYSYNC_MARKERS_FILE") or None

    # 0 waits indefinitely for the survey region to appear
    attach_timeout_ms: int = int(os.getenv("SURVEYSYNC_ATTACH_TIMEOUT_MS", "0"))

    def __post_init__(self):
        if self.reconcile_key not in ("position", "fingerprint"):
            self.reconcile_key = "position"


config = Config()
