"""Authoring bounded context.

Owns projects, actors, use cases and everything nested under a use case:
conditions, flows, steps and references, together with the public
identifier counters that name them.
"""
