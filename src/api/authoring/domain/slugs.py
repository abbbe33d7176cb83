"""Slug generation for projects and use cases."""

from __future__ import annotations

import re

_WHITESPACE = re.compile(r"\s+")
_DISALLOWED = re.compile(r"[^a-z0-9-]")


def _slugify(name: str) -> str:
    slug = _WHITESPACE.sub("-", name.lower().strip())
    return _DISALLOWED.sub("", slug)


def project_slug(name: str, project_id: int, max_length: int = 64) -> str:
    """Return ``<id>-<name-slug>`` truncated to ``max_length``."""
    prefix = f"{project_id}-"
    return prefix + _slugify(name)[: max(max_length - len(prefix), 0)]


def use_case_slug(
    name: str, use_case_id: int, public_id: str = "", max_length: int = 50
) -> str:
    """Return ``<id>-<public id>:<name-slug>`` truncated to ``max_length``.

    Without a public id the slug is ``<id>:<name-slug>``.

    Raises:
        ValueError: If ``max_length`` cannot hold the static id part
    """
    static = f"{use_case_id}-{public_id}:" if public_id else f"{use_case_id}:"
    available = max_length - len(static)
    if available < 0:
        raise ValueError(
            "max_length is too short to accommodate the id and public id"
        )
    return static + _slugify(name)[:available]
