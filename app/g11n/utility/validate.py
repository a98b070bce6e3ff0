"""Locale aware validation of phone numbers, postal codes, SSNs and currency."""

import re
from typing import Optional

from g11n.exceptions import MissingValidationRuleError
from g11n.registry import G11n


class Validate:
    """Validates input against the active locale's validation rules.

    Rules are regular expressions that must match the whole input.
    """

    def __init__(self, g11n: G11n):
        self.g11n = g11n

    def get(self, key: str, default: Optional[str] = None) -> str:
        """Validation rule from the active locale, else the default.

        Raises:
            MissingValidationRuleError: If neither the locale nor the caller
                supply a rule.
        """
        locale = self.g11n.current() or self.g11n.get_fallback()
        rule = locale.get_validation_rules(key) if locale is not None else None
        rule = rule or default

        if not rule:
            raise MissingValidationRuleError(f"Validation rule {key} does not exist")

        return rule

    def currency(self, value: str, rule: Optional[str] = None) -> bool:
        return self._matches(value, self.get("currency", rule))

    def phone(self, value: str, rule: Optional[str] = None) -> bool:
        return self._matches(value, self.get("phone", rule))

    def postal_code(self, value: str, rule: Optional[str] = None) -> bool:
        return self._matches(value, self.get("postalCode", rule))

    def ssn(self, value: str, rule: Optional[str] = None) -> bool:
        return self._matches(value, self.get("ssn", rule))

    @staticmethod
    def _matches(value: str, rule: str) -> bool:
        return re.fullmatch(rule, str(value)) is not None
