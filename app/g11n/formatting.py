"""Message parameter substitution.

Supports ``{{name}}``, ``{name}`` and positional ``{0}`` placeholders.
Numbers and dates are rendered for the target locale with Babel.
"""

import re
from abc import ABC, abstractmethod
from datetime import date, datetime
from decimal import Decimal
from functools import lru_cache
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from babel import Locale, UnknownLocaleError
from babel.dates import format_date, format_datetime
from babel.numbers import format_decimal

from g11n.logging import get_module_logger

logger = get_module_logger()

Params = Union[Mapping[str, Any], Sequence[Any], None]

# "{{name}}" is tried before "{name}" at each position
PLACEHOLDER_PATTERN = re.compile(r"\{\{(\w+)\}\}|\{(\w+)\}")


class MessageFormatter(ABC):
    """Formats a message template with parameters for a locale."""

    @abstractmethod
    def format(self, locale: str, template: str, params: Params = None) -> str:
        """Substitute parameters into a template.

        Args:
            locale: Locale code the parameters are rendered for.
            template: Message with placeholders.
            params: Named (mapping) or positional (sequence) parameters.

        Returns:
            The formatted message.

        Raises:
            ValueError: If a placeholder has no matching parameter.
        """
        pass


@lru_cache(maxsize=128)
def babel_locale(code: str) -> Optional[Locale]:
    """Babel locale for a code, or None when Babel does not know it."""
    try:
        return Locale.parse(code)
    except (UnknownLocaleError, ValueError) as e:
        logger.warning("unknown_babel_locale", locale=code, error=str(e))
        return None


class BabelMessageFormatter(MessageFormatter):
    """Placeholder substitution with locale aware number and date rendering."""

    def format(self, locale: str, template: str, params: Params = None) -> str:
        variables = normalize_params(params)

        all_vars: List[str] = []
        for double, single in PLACEHOLDER_PATTERN.findall(template):
            name = double or single
            if name not in all_vars:
                all_vars.append(name)

        for name in all_vars:
            if name not in variables:
                logger.error(
                    "missing_interpolation_variable",
                    variable=name,
                    available_variables=list(variables.keys()),
                )
                raise ValueError(f"Missing interpolation variable: {name}")

        target = babel_locale(locale)

        # One pass over the template, so substituted values are never rescanned
        def substitute(match: "re.Match[str]") -> str:
            name = match.group(1) or match.group(2)
            return self.render(variables[name], target)

        return PLACEHOLDER_PATTERN.sub(substitute, template)

    def render(self, value: Any, locale: Optional[Locale]) -> str:
        """Render one parameter value for a locale."""
        if locale is None or isinstance(value, bool):
            return str(value)
        if isinstance(value, (int, float, Decimal)):
            return format_decimal(value, locale=locale)
        if isinstance(value, datetime):
            return format_datetime(value, locale=locale)
        if isinstance(value, date):
            return format_date(value, locale=locale)
        return str(value)


def normalize_params(params: Params) -> Dict[str, Any]:
    """Turn positional parameters into a mapping keyed by position."""
    if params is None:
        return {}
    if isinstance(params, Mapping):
        return {str(key): value for key, value in params.items()}
    if isinstance(params, (str, bytes)):
        return {"0": params}
    return {str(index): value for index, value in enumerate(params)}
