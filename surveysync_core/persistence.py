#!/usr/bin/env python3
"""
Snapshot Store - one JSON file per survey

Files live under ``$SURVEYSYNC_WORKSPACE/surveys`` and are named
``survey_<id>.json``. ``store.persist`` has the signature the session
expects for its persistence callback.
"""

import json
import logging
import os
import re
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


_UNSAFE_KEY_CHARS = re.compile(r"[^\w.-]")


def _fallback_dirs() -> List[Path]:
    return [
        Path.home() / ".cache" / "surveysync" / "surveys",
        Path(tempfile.gettempdir()) / "surveysync" / "surveys",
    ]


def _writable_dir(path: Path) -> bool:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError:
        return False
    return os.access(path, os.W_OK)


def _resolve_base(base_dir: Optional[Path] = None) -> Path:
    """Workspace snapshot directory, or the first writable fallback."""
    preferred = base_dir or Path(os.getenv("SURVEYSYNC_WORKSPACE", "./workspace")) / "surveys"
    for candidate in [preferred, *_fallback_dirs()]:
        if _writable_dir(candidate):
            if candidate != preferred:
                logger.warning(f"{preferred} is not writable; storing snapshots in {candidate}")
            return candidate
    return preferred


def _file_key(survey_id: str) -> str:
    return _UNSAFE_KEY_CHARS.sub("_", (survey_id or "").strip()) or "default"


class SnapshotStore:
    def __init__(self, base_dir: Optional[Path] = None):
        self.base_dir = _resolve_base(Path(base_dir) if base_dir else None)

    def path_for(self, survey_id: str) -> Path:
        return self.base_dir / f"survey_{_file_key(survey_id)}.json"

    def save(self, survey_id: str, records: List[Dict[str, Any]]) -> Path:
        path = self.path_for(survey_id)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(records, f, ensure_ascii=False, indent=2)
        logger.debug(f"Saved {len(records)} questions to {path}")
        return path

    def persist(self, survey_id: str, records: List[Dict[str, Any]]) -> None:
        self.save(survey_id, records)

    def load(self, survey_id: str) -> Optional[List[Dict[str, Any]]]:
        path = self.path_for(survey_id)
        if not path.exists():
            return None
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable snapshot {path}: {e}")
            return None
        if not isinstance(data, list):
            logger.warning(f"Ignoring snapshot {path}: expected a list of questions")
            return None
        return data

    def delete(self, survey_id: str) -> bool:
        path = self.path_for(survey_id)
        if path.exists():
            path.unlink()
            return True
        return False
