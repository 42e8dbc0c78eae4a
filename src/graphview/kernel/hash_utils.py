"""Stable content hashes for datasets and color maps.

Hashes are taken over canonical JSON (sorted keys, fixed separators) so that
equal content always yields the same digest, regardless of dict insertion
order. Strings are hashed exactly as given: two spellings that differ only in
Unicode normal form are different content, just as they are different types
to the filter and the color map.
"""

import hashlib
import json
from typing import Any, Mapping

from .model import Dataset


def canonicalize_json(obj: Any) -> str:
    """
    Canonical JSON serialization.

    Rules:
    - UTF-8 (no ASCII escaping)
    - Sorted keys
    - Stable separators (",", ":")
    - Lists keep the order they arrive in; sort them before calling
    """
    return json.dumps(
        obj,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )


def _sha256(text: str) -> str:
    digest = hashlib.sha256(text.encode("utf-8")).hexdigest()
    return f"sha256:{digest}"


def hash_dataset(dataset: Dataset) -> str:
    """Fingerprint of a dataset's content (order of nodes and edges included)."""
    return _sha256(canonicalize_json(dataset.model_dump(mode="json")))


def hash_color_map(color_map: Mapping[str, str]) -> str:
    """Fingerprint of a type -> color mapping."""
    return _sha256(canonicalize_json(dict(color_map)))
