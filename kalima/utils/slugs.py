"""
Slug helpers
"""

import re

SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


def slugify(text: str) -> str:
    """Create a URL-safe slug from a title"""
    s = (text or "").lower()
    s = re.sub(r"[^a-z0-9]+", "-", s).strip("-")
    return s or "article"


def is_valid_slug(slug: str) -> bool:
    return bool(slug) and bool(SLUG_PATTERN.match(slug))


def unique_slug(base: str, existing: set[str]) -> str:
    slug = base
    idx = 1
    while slug in existing:
        idx += 1
        slug = f"{base}-{idx}"
    return slug
