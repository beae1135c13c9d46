"""GraphQL resolvers over an in-memory dataset."""

from itertools import count

from ariadne import MutationType, ObjectType, QueryType

USERS = {
    "1": {"id": "1", "name": "Ann", "email": "ann@example.com"},
    "2": {"id": "2", "name": "Bob", "email": "bob@example.com"},
}
POSTS = {
    "1": {"id": "1", "title": "Hello", "content": "First post", "author_id": "1"},
}
STATS = {"calls": 0}
_post_ids = count(2)


def _track() -> None:
    STATS["calls"] += 1


query = QueryType()


@query.field("users")
async def resolve_users(_, info):
    _track()
    return list(USERS.values())


@query.field("user")
async def resolve_user(_, info, id: str):
    _track()
    return USERS.get(id)


@query.field("me")
async def resolve_me(_, info):
    _track()
    current_user_id = info.context.get("current_user_id")
    return USERS.get(current_user_id) if current_user_id else None


@query.field("posts")
async def resolve_posts(_, info):
    _track()
    return list(POSTS.values())


@query.field("post")
async def resolve_post(_, info, id: str):
    _track()
    return POSTS.get(id)


@query.field("dbStats")
async def resolve_db_stats(_, info):
    return dict(STATS)


mutation = MutationType()


@mutation.field("updateUser")
async def resolve_update_user(_, info, id: str, name=None, email=None):
    user = USERS.get(id)
    if user is None:
        return None
    if name is not None:
        user["name"] = name
    if email is not None:
        user["email"] = email
    # The returned User is invalidated by the response cache
    return user


@mutation.field("createPost")
async def resolve_create_post(_, info, title: str, content: str, authorId: str):
    post = {
        "id": str(next(_post_ids)),
        "title": title,
        "content": content,
        "author_id": authorId,
    }
    POSTS[post["id"]] = post
    return post


user_type = ObjectType("User")


@user_type.field("posts")
async def resolve_user_posts(user, info):
    return [post for post in POSTS.values() if post["author_id"] == user["id"]]


post_type = ObjectType("Post")


@post_type.field("author")
async def resolve_post_author(post, info):
    return USERS[post["author_id"]]


resolvers = [query, mutation, user_type, post_type]
