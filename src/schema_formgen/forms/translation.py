"""
Translation of framework strings and field labels.

A caller-supplied function (an i18n ``gettext``-style callable) is consulted
first. When it echoes the key back unchanged the built-in translations are
tried, and finally the key itself is returned.
"""

import logging
from typing import Callable, Dict, List, Mapping, Optional

from schema_formgen.forms.form_constants import DEFAULT_TRANSLATIONS

logger = logging.getLogger(__name__)

TranslationFunction = Callable[[str], str]


class Translator:
    """
    Callable translator with English defaults.

    Example:
        t = Translator(lambda key: {"email": "E-mail"}.get(key, key))
        t("email")                 # "E-mail"
        t("schemaForm.submit")     # "Submit"
        t("firstName")             # "firstName"
    """

    def __init__(self, fn: Optional[TranslationFunction] = None,
                 translations: Optional[Mapping[str, str]] = None):
        self._fn = fn
        self._translations: Dict[str, str] = dict(DEFAULT_TRANSLATIONS)
        if translations:
            self.set_translations(translations)

    def __call__(self, key: str) -> str:
        return self.translate(key)

    def translate(self, key: str) -> str:
        if self._fn is not None:
            result = self._fn(key)
            if result != key:
                return result
        return self._translations.get(key, key)

    def set_function(self, fn: Optional[TranslationFunction]) -> None:
        self._fn = fn

    def set_translations(self, translations: Mapping[str, str]) -> None:
        """Merge translations over the current ones."""
        self._translations.update(translations)
        logger.debug(f"Merged {len(translations)} translations")

    def get_translation_keys(self) -> List[str]:
        return list(self._translations.keys())

    def reset(self) -> None:
        """Drop the custom function and restore the built-in translations."""
        self._fn = None
        self._translations = dict(DEFAULT_TRANSLATIONS)
