"""Routing — pattern compiler, route registry, matcher, and URI builder.

Patterns are compiled when a route is added; lookups run against an
immutable snapshot of the route table.
"""
