"""Resolver package for GraphQL schema.

Query, mutation and field resolvers live in sibling modules, one per domain
(users, posts, finance). Each reads the Database handle from the request
context.
"""
