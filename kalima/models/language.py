"""
Supported content languages
"""

from enum import Enum
from typing import Optional


class Language(str, Enum):
    """Language enumeration; values double as URL segments"""

    EN = "en"
    AR = "ar"
    FR = "fr"
    ES = "es"
    DE = "de"

    @property
    def is_rtl(self) -> bool:
        return self is Language.AR

    @property
    def direction(self) -> str:
        return "rtl" if self.is_rtl else "ltr"


SUPPORTED_LANGUAGES = [lang.value for lang in Language]

DEFAULT_LANGUAGE = Language.EN

# Fixed fallback for content and UI labels, independent of the requested language
FALLBACK_LANGUAGE = Language.EN


def parse_language(value: Optional[str]) -> Optional[Language]:
    """Return the Language for an exact code, None otherwise"""
    if not value:
        return None
    try:
        return Language(value)
    except ValueError:
        return None
