"""UI label lookup over the flattened translation table"""

import logging
from typing import Dict, Iterable, Optional, Union

from kalima.data.translations import TRANSLATIONS
from kalima.models.language import FALLBACK_LANGUAGE, Language

logger = logging.getLogger(__name__)


class Translator:
    def __init__(self, table: Optional[Dict[str, Dict[str, str]]] = None):
        self.table = table if table is not None else TRANSLATIONS

    def translate(self, key: str, language: Union[Language, str]) -> str:
        """requested language -> English -> the key itself (logged)"""
        code = language.value if isinstance(language, Language) else str(language)
        value = self.table.get(code, {}).get(key)
        if value:
            return value
        value = self.table.get(FALLBACK_LANGUAGE.value, {}).get(key)
        if value:
            return value
        logger.warning(f"Missing UI translation for key '{key}' ({code}); using key")
        return key

    def missing_keys(self, language: Union[Language, str]) -> list[str]:
        """Keys present in English but absent for `language`"""
        code = language.value if isinstance(language, Language) else str(language)
        reference = self.table.get(FALLBACK_LANGUAGE.value, {})
        current = self.table.get(code, {})
        return sorted(key for key in reference if key not in current)

    def check_completeness(self, required_keys: Iterable[str]) -> list[str]:
        """Return required keys missing from the English table"""
        reference = self.table.get(FALLBACK_LANGUAGE.value, {})
        return [key for key in required_keys if not reference.get(key)]


translator = Translator()


def t(key: str, language: Union[Language, str]) -> str:
    return translator.translate(key, language)
