"""g11n - globalization: locale resolution, message translation and formatting.

Provides a registry of supported locales with a fallback chain, detection of
the active locale from client preferences, and message lookup across the
resulting cascade of locales.

Main components:
- keys: locale key canonicalization (LocaleFormat, canonicalize)
- locale: LocaleNode with inherited configuration and resource rules
- registry: G11n registry (locales, fallback, active locale, cascade)
- translator: Translator and MessageTranslator with catalog caching
- loader: resource readers (YAML, JSON, PO) and bundles
- utility: Format, Number, Validate and Inflector helpers
- factory: create_g11n() wiring everything from settings
"""

from g11n.cache import Cache, MemoryCache
from g11n.exceptions import (
    G11nError,
    InvalidCatalogError,
    LocaleCycleError,
    LocaleNotInitializedError,
    MissingFallbackError,
    MissingLocaleError,
    MissingMessageError,
    MissingPatternError,
    MissingResourceError,
    MissingTranslatorError,
    MissingValidationRuleError,
)
from g11n.factory import create_g11n
from g11n.keys import LocaleFormat, canonicalize
from g11n.loader import (
    JSONResourceReader,
    LocaleBundle,
    MessageBundle,
    POResourceReader,
    ResourceBundle,
    ResourceReader,
    YAMLResourceReader,
)
from g11n.locale import LocaleNode
from g11n.models import LocaleChanged, LocaleConfig, ParsedKey
from g11n.registry import G11n
from g11n.translator import MessageTranslator, Translator

__all__ = [
    "G11n",
    "LocaleNode",
    "LocaleConfig",
    "LocaleChanged",
    "LocaleFormat",
    "ParsedKey",
    "canonicalize",
    "create_g11n",
    "Translator",
    "MessageTranslator",
    "Cache",
    "MemoryCache",
    "ResourceReader",
    "YAMLResourceReader",
    "JSONResourceReader",
    "POResourceReader",
    "ResourceBundle",
    "LocaleBundle",
    "MessageBundle",
    "G11nError",
    "InvalidCatalogError",
    "LocaleCycleError",
    "LocaleNotInitializedError",
    "MissingFallbackError",
    "MissingLocaleError",
    "MissingMessageError",
    "MissingPatternError",
    "MissingResourceError",
    "MissingTranslatorError",
    "MissingValidationRuleError",
]
