"""Pytest configuration for responsecache tests."""

from typing import Any

import pytest
from graphql import GraphQLSchema, build_schema

from responsecache import InMemoryCacheStore, ResponseCache, ResponseCacheConfig
from responsecache.adapters.graphql_core import CachingExecutor

TYPE_DEFS = """
    interface Node {
        id: ID!
    }

    type User implements Node {
        id: ID!
        name: String!
        friends: [User!]!
        secret: Secret
    }

    type Post implements Node {
        id: ID!
        title: String!
        author: User!
    }

    type Secret {
        id: ID!
        child: Child
    }

    type Child {
        id: ID!
    }

    union SearchResult = User | Post

    type Query {
        user(id: ID!): User
        users: [User!]!
        post(id: ID!): Post
        node(id: ID!): Node
        search: [SearchResult!]!
        secret: Secret
        version: String
    }

    type Mutation {
        updateUser(id: ID!, name: String!): User
    }
"""


class FakeDatabase:
    """In-memory data with resolver call counting."""

    def __init__(self) -> None:
        self.calls = 0
        self.users: dict[str, dict[str, Any]] = {
            "1": {"__typename": "User", "id": "1", "name": "Ann", "friend_ids": ["2"]},
            "2": {"__typename": "User", "id": "2", "name": "Bob", "friend_ids": []},
        }
        self.posts: dict[str, dict[str, Any]] = {
            "10": {"__typename": "Post", "id": "10", "title": "Hello", "author_id": "1"},
        }

    def user(self, user_id: str) -> dict[str, Any] | None:
        user = self.users.get(user_id)
        if user is None:
            return None
        return {
            **user,
            "friends": lambda _info: [self.user(friend) for friend in user["friend_ids"]],
            "secret": {"__typename": "Secret", "id": f"s{user_id}", "child": {"id": "c1"}},
        }

    def post(self, post_id: str) -> dict[str, Any] | None:
        post = self.posts.get(post_id)
        if post is None:
            return None
        return {**post, "author": self.user(post["author_id"])}

    def root_value(self) -> dict[str, Any]:
        def user(_info: Any, id: str) -> Any:
            self.calls += 1
            return self.user(id)

        def users(_info: Any) -> Any:
            self.calls += 1
            return [self.user(user_id) for user_id in self.users]

        def post(_info: Any, id: str) -> Any:
            self.calls += 1
            return self.post(id)

        def node(_info: Any, id: str) -> Any:
            self.calls += 1
            return self.user(id) or self.post(id)

        def search(_info: Any) -> Any:
            self.calls += 1
            return [self.user("1"), self.post("10")]

        def secret(_info: Any) -> Any:
            self.calls += 1
            return {"__typename": "Secret", "id": "s1", "child": {"id": "c1"}}

        def version(_info: Any) -> str:
            self.calls += 1
            return "1.0"

        def update_user(_info: Any, id: str, name: str) -> Any:
            self.calls += 1
            self.users[id]["name"] = name
            return self.user(id)

        return {
            "user": user,
            "users": users,
            "post": post,
            "node": node,
            "search": search,
            "secret": secret,
            "version": version,
            "updateUser": update_user,
        }


@pytest.fixture
def schema() -> GraphQLSchema:
    return build_schema(TYPE_DEFS)


@pytest.fixture
def database() -> FakeDatabase:
    return FakeDatabase()


@pytest.fixture
def store() -> InMemoryCacheStore:
    return InMemoryCacheStore(maxsize=100)


@pytest.fixture
def make_executor(schema: GraphQLSchema, database: FakeDatabase, store: InMemoryCacheStore):
    """Build a caching executor over the fake database."""

    def factory(**config: Any) -> CachingExecutor:
        config.setdefault("cache", store)
        return CachingExecutor(
            schema,
            ResponseCache(ResponseCacheConfig(**config)),
            root_value=database.root_value(),
        )

    return factory
