"""GraphQL schema definitions."""

TYPE_DEFS = """
type Query {
    "Get all users."
    users: [User!]!

    "Get a specific user by ID."
    user(id: ID!): User

    "Get the currently authenticated user. Cached per session."
    me: User

    "Get all posts."
    posts: [Post!]!

    "Get a specific post by ID."
    post(id: ID!): Post

    "Get resolver call statistics. Never cached."
    dbStats: DbStats
}

type Mutation {
    "Update a user's information. Invalidates every cached result containing the user."
    updateUser(id: ID!, name: String, email: String): User

    "Create a new post."
    createPost(title: String!, content: String!, authorId: ID!): Post
}

type User {
    id: ID!
    name: String!
    email: String!
    posts: [Post!]!
}

type Post {
    id: ID!
    title: String!
    content: String!
    author: User!
}

type DbStats {
    calls: Int!
}
"""
