"""Strawberry framework adapter for responsecache."""

from responsecache.adapters.strawberry.extension import ResponseCacheExtension

__all__ = ["ResponseCacheExtension"]
