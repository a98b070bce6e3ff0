"""Custom exceptions for the g11n package.

Every error is raised at the point of detection and is never retried: a
missing resource cannot appear without an external change.
"""

from typing import Sequence


class G11nError(Exception):
    """Base exception for all g11n errors.

    Example:
        try:
            g11n.translate("core.default.greeting")
        except G11nError as e:
            logger.error("g11n_error", error=str(e))
    """

    pass


class InvalidCatalogError(G11nError, ValueError):
    """Raised when a message key has fewer than two dot separated segments.

    Example:
        >>> translator.parse_key("greeting")
        Traceback (most recent call last):
        ...
        InvalidCatalogError: No domain or catalog present for greeting key
    """

    pass


class MissingLocaleError(G11nError, LookupError):
    """Raised when a locale code has not been registered.

    Example:
        >>> g11n.use_locale("xx")
        Traceback (most recent call last):
        ...
        MissingLocaleError: Locale xx does not exist
    """

    pass


class MissingFallbackError(G11nError):
    """Raised when a cascade is requested before any fallback is configured."""

    pass


class MissingTranslatorError(G11nError):
    """Raised when locale detection completes without an attached translator."""

    pass


class MissingMessageError(G11nError, KeyError):
    """Raised when a message key is not found anywhere in the cascade.

    Attributes:
        key: The message key that was looked up.
        locales: Locale codes tried, in cascade order.
    """

    def __init__(self, key: str, locales: Sequence[str]):
        self.key = key
        self.locales = list(locales)
        super().__init__(key)

    def __str__(self) -> str:
        return f"Message key {self.key} does not exist in {', '.join(self.locales)}"


class MissingPatternError(G11nError, LookupError):
    """Raised when a format pattern has no locale value and no default."""

    pass


class MissingValidationRuleError(G11nError, LookupError):
    """Raised when a validation rule has no locale value and no default."""

    pass


class MissingResourceError(G11nError):
    """Raised when a resource bundle is asked to load without any reader."""

    pass


class LocaleNotInitializedError(G11nError):
    """Raised when locale configuration is read before ``initialize()``."""

    pass


class LocaleCycleError(G11nError):
    """Raised when a locale's parent chain loops back on itself."""

    pass
