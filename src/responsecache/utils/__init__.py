"""Utility helpers for responsecache."""

from responsecache.utils.hashing import hash_value, sha256_hex, stable_json
from responsecache.utils.results import result_from_dict, result_to_dict

__all__ = [
    "hash_value",
    "result_from_dict",
    "result_to_dict",
    "sha256_hex",
    "stable_json",
]
