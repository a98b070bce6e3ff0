"""Locale aware inflection: plurals, singulars, ordinals and transliteration.

Every operation returns its input unchanged when no locale is registered or
the active locale has no rules for it.
"""

import re
from typing import Any, Dict, Optional, Union

from g11n.registry import G11n

NON_ASCII = re.compile(r"[^\x09\x0A\x0D\x20-\x7E]")


class Inflector:
    """Applies the active locale's inflection rules.

    Rule tables:
        uninflected: words that never change.
        irregular: mapping of singular to plural.
        plural / singular: ordered mapping of regex to replacement.
        ordinal: mapping of last digit to a ``#`` template, plus ``default``.
        transliteration: mapping of regex to ASCII replacement.
    """

    def __init__(self, g11n: G11n):
        self.g11n = g11n
        self._cache: Dict[tuple, Any] = {}

    def _rules(self) -> Optional[Dict[str, Any]]:
        if not self.g11n.is_enabled():
            return None
        locale = self.g11n.current() or self.g11n.get_fallback()
        return locale.get_inflection_rules() or None

    def _memo(self, method: str, value: Any) -> tuple:
        locale = self.g11n.current() or self.g11n.get_fallback()
        return (method, locale.code if locale else None, value)

    def pluralize(self, word: str) -> str:
        rules = self._rules()
        if not rules:
            return word

        key = self._memo("pluralize", word)
        if key not in self._cache:
            self._cache[key] = self._inflect(word.lower(), rules, "plural", plural=True)
        return self._cache[key]

    def singularize(self, word: str) -> str:
        rules = self._rules()
        if not rules:
            return word

        key = self._memo("singularize", word)
        if key not in self._cache:
            self._cache[key] = self._inflect(
                word.lower(), rules, "singular", plural=False
            )
        return self._cache[key]

    @staticmethod
    def _inflect(word: str, rules: Dict[str, Any], table: str, plural: bool) -> str:
        irregular: Dict[str, str] = rules.get("irregular") or {}

        if word in (rules.get("uninflected") or []):
            return word

        if plural:
            if word in irregular:
                return irregular[word]
            if word in irregular.values():
                return word
        else:
            for singular, plural_form in irregular.items():
                if plural_form == word:
                    return singular
            if word in irregular:
                return word

        for pattern, replacement in (rules.get(table) or {}).items():
            if re.search(pattern, word, re.IGNORECASE):
                return re.sub(pattern, replacement, word, count=1, flags=re.IGNORECASE)

        return word

    def ordinal(self, number: Union[int, str]) -> str:
        """Number with its ordinal suffix (``1st``, ``12th``, ``23rd``)."""
        rules = self._rules()
        if not rules or not rules.get("ordinal"):
            return str(number)

        number = int(number)
        ordinal: Dict[Any, str] = rules["ordinal"]
        default = ordinal.get("default")

        # Teens 11-13
        if 11 <= number % 100 <= 13 and default:
            return default.replace("#", str(number))

        last = number % 10
        template = ordinal.get(last) or ordinal.get(str(last)) or default
        if template:
            return template.replace("#", str(number))

        return str(number)

    def transliterate(self, text: str) -> str:
        """Replace accented characters with ASCII, then drop any non 7-bit ASCII."""
        rules = self._rules()
        if not rules or not rules.get("transliteration"):
            return text

        for pattern, replacement in rules["transliteration"].items():
            text = re.sub(pattern, replacement, text)

        return NON_ASCII.sub("", text)
