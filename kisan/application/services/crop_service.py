from __future__ import annotations

from typing import Any, Dict, List, Optional

from ...infra.crop_dataset import (
    dataset_loaded,
    filter_crops_by_category,
    find_crop,
    list_crop_summaries,
    load_crop_dataset,
)


class CropNotFoundError(LookupError):
    """Raised when a named crop is absent from the dataset."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Crop not found: {name}")


def list_crops() -> List[Dict[str, Any]]:
    return [item.model_dump() for item in list_crop_summaries()]


def query_dataset(
    *, crop: Optional[str] = None, category: Optional[str] = None
) -> Any:
    """
    Dataset lookup used by ``GET /api/dataset``.

    A crop name takes precedence over a category filter; with neither the whole
    dataset is returned.
    """
    if crop:
        record = find_crop(crop)
        if record is None:
            raise CropNotFoundError(crop)
        return record.model_dump()
    if category:
        return [item.model_dump() for item in filter_crops_by_category(category)]
    return load_crop_dataset()


def is_dataset_loaded() -> bool:
    return dataset_loaded()
