from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from ..observability.logging_utils import log_error_event, log_event
from ..schemas import CropRecord, CropSummary
from .config import get_config


def _default_dataset_path() -> Path:
    return Path(__file__).resolve().parents[1] / "resources" / "agri_data.json"


def _empty_dataset() -> Dict[str, Any]:
    return {"crops": [], "general_advice": {}}


def resolve_dataset_path() -> Path:
    cfg = get_config()
    if cfg.crop_dataset_path:
        return Path(cfg.crop_dataset_path)
    return _default_dataset_path()


@lru_cache(maxsize=4)
def _load_dataset_cached(path: Path) -> Dict[str, Any]:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        log_error_event("crop_dataset_load_failed", path=str(path), error=str(exc))
        return _empty_dataset()
    if not isinstance(payload, dict):
        log_error_event(
            "crop_dataset_load_failed", path=str(path), error="top-level value is not an object"
        )
        return _empty_dataset()
    log_event(
        "crop_dataset_loaded",
        path=str(path),
        crops=len(payload.get("crops") or []),
    )
    return payload


def load_crop_dataset(path: Optional[Path] = None) -> Dict[str, Any]:
    """Return the agriculture dataset; unreadable files degrade to an empty one."""
    return _load_dataset_cached(Path(path) if path else resolve_dataset_path())


def clear_dataset_cache() -> None:
    _load_dataset_cached.cache_clear()


def _crop_records(dataset: Dict[str, Any]) -> List[CropRecord]:
    records = []
    for item in dataset.get("crops") or []:
        if not isinstance(item, dict) or not item.get("name"):
            continue
        try:
            records.append(CropRecord.model_validate(item))
        except ValidationError as exc:
            log_error_event(
                "crop_record_skipped", name=item.get("name"), error=str(exc)
            )
    return records


def find_crop(name: str, path: Optional[Path] = None) -> Optional[CropRecord]:
    """Match the English name case-insensitively or an Urdu/Punjabi name exactly."""
    if not name:
        return None
    needle = name.strip()
    lowered = needle.lower()
    for record in _crop_records(load_crop_dataset(path)):
        if record.name.lower() == lowered:
            return record
        if needle in (record.name_urdu, record.name_punjabi):
            return record
    return None


def filter_crops_by_category(category: str, path: Optional[Path] = None) -> List[CropRecord]:
    lowered = (category or "").strip().lower()
    return [
        record
        for record in _crop_records(load_crop_dataset(path))
        if record.category and record.category.lower() == lowered
    ]


def list_crop_summaries(path: Optional[Path] = None) -> List[CropSummary]:
    return [
        CropSummary(
            name=record.name,
            name_urdu=record.name_urdu,
            name_punjabi=record.name_punjabi,
            category=record.category,
        )
        for record in _crop_records(load_crop_dataset(path))
    ]


def dataset_loaded(path: Optional[Path] = None) -> bool:
    dataset = load_crop_dataset(path)
    return any(bool(value) for value in dataset.values())
