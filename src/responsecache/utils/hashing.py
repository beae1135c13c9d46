"""Hashing utilities for cache key generation."""

import hashlib
import json
from typing import Any


def stable_json(value: Any) -> str:
    """Serialize a value to canonical JSON.

    Object keys are sorted recursively, so semantically identical
    mappings with different key order produce identical text.

    Args:
        value: Any JSON-serializable value.

    Returns:
        The canonical JSON string.
    """
    return json.dumps(value, sort_keys=True, separators=(",", ":"), default=str)


def sha256_hex(text: str) -> str:
    """Return the full SHA-256 hex digest of a string."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def hash_value(value: Any) -> str:
    """Create a deterministic hash of a value.

    Args:
        value: Any JSON-serializable value.

    Returns:
        A hexadecimal SHA-256 digest of the value's canonical JSON.
    """
    return sha256_hex(stable_json(value))
