"""
Translation resolution for content entities.

Fallback chain: requested language -> English -> first declared language.
Resolution is pure: the same entity and language always give the same view.
"""

from typing import Any, Dict, Mapping, Optional, Union
from pydantic import BaseModel, Field, ConfigDict

from kalima.exceptions import ContentNotFoundError
from kalima.models.language import FALLBACK_LANGUAGE, Language


class LocalizedView(BaseModel):
    """One entity projected into a single language"""

    language: str
    requested_language: str = Field(..., alias="requestedLanguage")
    is_fallback: bool = Field(False, alias="isFallback")
    translation: Any

    model_config = ConfigDict(populate_by_name=True)


def _code(language: Union[Language, str]) -> str:
    return language.value if isinstance(language, Language) else str(language)


def _title_of(translation: Any) -> str:
    if isinstance(translation, Mapping):
        title = translation.get("title")
    else:
        title = getattr(translation, "title", None)
    return title.strip() if isinstance(title, str) else ""


def pick_language(
    translations: Mapping[str, Any],
    available_languages: list[str],
    requested: str,
) -> Optional[str]:
    """Return the language code whose translation should be shown"""
    if not translations:
        return None

    current = translations.get(requested)
    if current is not None and _title_of(current):
        return requested

    fallback = FALLBACK_LANGUAGE.value
    if translations.get(fallback) is not None:
        return fallback

    for code in available_languages:
        if translations.get(code) is not None:
            return code

    # availableLanguages disagrees with the stored translations; take the
    # first one the document actually has
    return next(iter(translations))


def resolve(entity: Any, requested_language: Union[Language, str]) -> Optional[LocalizedView]:
    """
    Project an entity into the requested language.

    Args:
        entity: anything with `translations` and `available_languages`
            (Article, StaticPage)
        requested_language: language code or Language

    Returns:
        LocalizedView, or None when the entity has no translations at all
    """
    requested = _code(requested_language)
    translations: Dict[str, Any] = getattr(entity, "translations", None) or {}
    available = list(getattr(entity, "available_languages", None) or [])

    chosen = pick_language(translations, available, requested)
    if chosen is None:
        return None

    return LocalizedView(
        language=chosen,
        requested_language=requested,
        is_fallback=chosen != requested,
        translation=translations[chosen],
    )


def resolve_or_raise(entity: Any, requested_language: Union[Language, str], kind: str = "article") -> LocalizedView:
    view = resolve(entity, requested_language)
    if view is None:
        raise ContentNotFoundError(kind, getattr(entity, "slug", "") or getattr(entity, "id", ""))
    return view


def localize_title(
    titles: Optional[Mapping[str, str]],
    requested_language: Union[Language, str],
    default: str,
) -> str:
    """Same chain for a plain language -> string mapping, ending at `default`"""
    if not titles:
        return default
    requested = _code(requested_language)
    value = titles.get(requested)
    if value:
        return value
    value = titles.get(FALLBACK_LANGUAGE.value)
    if value:
        return value
    for candidate in titles.values():
        if candidate:
            return candidate
    return default
