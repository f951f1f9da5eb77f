"""
Language resolution from request paths.

A path either starts with a supported language segment (/fr/article/x) or
not (/article/x). Unprefixed public paths get the active language inserted
once; the client replaces its history entry with the canonical path, so
the rewrite is never a navigation.
"""

from typing import Optional, Union
from pydantic import BaseModel, Field, ConfigDict

from kalima.models.language import DEFAULT_LANGUAGE, Language, parse_language

# Paths that stay unprefixed (prefix match), plus the bare root
UNPREFIXED_PATH_PREFIXES = ("/admin", "/login", "/register", "/profile")


class LanguageRoute(BaseModel):
    active_language: Language = Field(..., alias="activeLanguage")
    path_without_language: str = Field(..., alias="pathWithoutLanguage")
    is_language_in_path: bool = Field(..., alias="isLanguageInPath")

    model_config = ConfigDict(populate_by_name=True)


def _split_query(path: str) -> tuple[str, str]:
    base, sep, query = path.partition("?")
    return base or "/", f"{sep}{query}"


def _segments(path: str) -> list[str]:
    return [segment for segment in path.split("/") if segment]


def resolve_path(path: str, preferred_language: Union[Language, str, None] = None) -> LanguageRoute:
    """
    Determine the active language for a path.

    Args:
        path: request path, optionally with a query string
        preferred_language: last persisted user choice, if any

    Returns:
        LanguageRoute with the language-less path
    """
    base, _ = _split_query(path or "/")
    segments = _segments(base)
    url_language = parse_language(segments[0]) if segments else None

    if url_language is not None:
        return LanguageRoute(
            active_language=url_language,
            path_without_language="/" + "/".join(segments[1:]),
            is_language_in_path=True,
        )

    fallback = parse_language(
        preferred_language.value if isinstance(preferred_language, Language) else preferred_language
    ) or DEFAULT_LANGUAGE
    return LanguageRoute(
        active_language=fallback,
        path_without_language=base,
        is_language_in_path=False,
    )


def has_language_prefix(path: str) -> bool:
    base, _ = _split_query(path or "/")
    segments = _segments(base)
    return bool(segments) and parse_language(segments[0]) is not None


def needs_language_prefix(path: str) -> bool:
    base, _ = _split_query(path or "/")
    if base == "/" or has_language_prefix(base):
        return False
    return not base.startswith(UNPREFIXED_PATH_PREFIXES)


def rewrite_path(path: str, language: Union[Language, str]) -> str:
    """Insert the language segment when needed; idempotent"""
    if not needs_language_prefix(path):
        return path
    code = language.value if isinstance(language, Language) else str(language)
    base, query = _split_query(path)
    return f"/{code}{base}{query}"


def canonical_path(path: str, preferred_language: Optional[Union[Language, str]] = None) -> tuple[str, bool]:
    """Return (canonical path, whether it differs from `path`)"""
    route = resolve_path(path, preferred_language)
    rewritten = rewrite_path(path, route.active_language)
    return rewritten, rewritten != path


def localized_path(path: str, language: Union[Language, str]) -> str:
    """Same page in another language (used by language switchers)"""
    code = language.value if isinstance(language, Language) else str(language)
    base = resolve_path(path).path_without_language
    if base == "/":
        return f"/{code}"
    if not needs_language_prefix(base):
        return base
    return f"/{code}{base}"
