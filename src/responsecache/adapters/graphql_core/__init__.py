"""graphql-core adapter for responsecache."""

from responsecache.adapters.graphql_core.executor import CachingExecutor

__all__ = ["CachingExecutor"]
