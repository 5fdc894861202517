"""Resolver package for GraphQL schema.

Resolver functions referenced by the GraphQL queries live in sibling
modules and talk to the database through the repository helpers.
"""
