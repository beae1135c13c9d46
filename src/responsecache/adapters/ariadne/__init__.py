"""Ariadne framework adapter for responsecache."""

from responsecache.adapters.ariadne.graphql import CachingGraphQL
from responsecache.adapters.ariadne.handler import CachingGraphQLHTTPHandler

__all__ = [
    "CachingGraphQL",
    "CachingGraphQLHTTPHandler",
]
