"""Test data factories for g11n testing.

Provides deterministic builders for:
- Resource trees (locale metadata, format patterns, message catalogs)
- LocaleNode instances
- G11n registries with a MessageTranslator attached
"""

from pathlib import Path
from typing import Any, Dict, Optional, Sequence

import yaml

from g11n import G11n, LocaleNode, MessageTranslator, YAMLResourceReader
from g11n.cache import Cache

DEFAULT_LOCALES: Dict[str, Dict[str, Dict[str, Any]]] = {
    "en": {
        "locale": {
            "code": "en",
            "iso2": "en",
            "iso3": "eng",
            "title": "English",
            "timezone": "America/New_York",
        },
        "formats": {
            "date": "%m/%d/%Y",
            "time": "%I:%M%p",
            "ssn": "###-##-####",
            "phone": {7: "###-####", 10: "(###) ###-####"},
            "number": {"thousands": ",", "decimals": ".", "places": 2},
            "currency": {
                "dollar": "$#",
                "cents": "#¢",
                "negative": "(#)",
                "use": "dollar",
            },
        },
        "inflections": {
            "irregular": {"person": "people", "child": "children"},
            "uninflected": ["sheep"],
            "plural": {"([^aeiouy]|qu)y$": r"\1ies", "(x|ch|ss|sh)$": r"\1es", "$": "s"},
            "singular": {"([^aeiouy]|qu)ies$": r"\1y", "(x|ch|ss|sh)es$": r"\1", "s$": ""},
            "ordinal": {1: "#st", 2: "#nd", 3: "#rd", "default": "#th"},
            "transliteration": {"[éèê]": "e", "ç": "c"},
        },
        "validations": {
            "phone": r"^\(\d{3}\) \d{3}-\d{4}$",
            "postalCode": r"^\d{5}(?:-\d{4})?$",
            "ssn": r"^\d{3}-\d{2}-\d{4}$",
            "currency": r"^\$?\d+(?:\.\d{2})?$",
        },
    },
    "en_US": {
        "locale": {
            "code": "en_US",
            "parent": "en",
            "title": "English (United States)",
        },
        "formats": {"date": "%m/%d/%y"},
    },
    "fr": {
        "locale": {
            "code": "fr",
            "iso2": "fr",
            "iso3": ["fra", "fre"],
            "title": "French",
            "timezone": "Europe/Paris",
        },
        "formats": {
            "date": "%d/%m/%Y",
            "number": {"thousands": " ", "decimals": ",", "places": 2},
        },
        "validations": {"postalCode": r"^\d{5}$"},
    },
}

DEFAULT_MESSAGES: Dict[str, Dict[str, Dict[str, Any]]] = {
    "en": {
        "default": {
            "greeting": "Hello",
            "welcome": "Welcome, {name}",
            "count": "You have {0} messages",
            "nav": {"home": "Home"},
        },
    },
    "en_US": {
        "default": {"color": "Color"},
    },
    "fr": {
        "default": {"greeting": "Bonjour", "onlyFr": "Seulement en français"},
    },
}

DEFAULT_DOMAIN_MESSAGES: Dict[str, Dict[str, Dict[str, Dict[str, Any]]]] = {
    "shop": {
        "en": {"cart": {"empty": "Your cart is empty"}},
    },
}


def write_yaml(path: Path, data: Dict[str, Any]) -> Path:
    """Write a mapping to a YAML file, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(data, f, allow_unicode=True, sort_keys=False)
    return path


def make_resource_root(
    root: Path,
    locales: Optional[Dict[str, Dict[str, Dict[str, Any]]]] = None,
    messages: Optional[Dict[str, Dict[str, Dict[str, Any]]]] = None,
    domain_messages: Optional[Dict[str, Dict[str, Dict[str, Dict[str, Any]]]]] = None,
) -> Path:
    """Create a resource root on disk.

    Args:
        root: Directory to populate.
        locales: {code: {resource: data}} written under locales/<code>/.
        messages: {code: {catalog: data}} for the default domain.
        domain_messages: {domain: {code: {catalog: data}}} for other domains.

    Returns:
        The populated root.
    """
    locales = DEFAULT_LOCALES if locales is None else locales
    messages = DEFAULT_MESSAGES if messages is None else messages
    domain_messages = (
        DEFAULT_DOMAIN_MESSAGES if domain_messages is None else domain_messages
    )

    for code, resources in locales.items():
        for resource, data in resources.items():
            write_yaml(root / "locales" / code / f"{resource}.yml", data)

    for code, catalogs in messages.items():
        for catalog, data in catalogs.items():
            write_yaml(root / "messages" / code / f"{catalog}.yml", data)

    for domain, by_locale in domain_messages.items():
        for code, catalogs in by_locale.items():
            for catalog, data in catalogs.items():
                write_yaml(root / domain / "messages" / code / f"{catalog}.yml", data)

    return root


def make_locale_node(
    code: str,
    root: Path,
    config: Optional[Dict[str, Any]] = None,
    initialize: bool = False,
) -> LocaleNode:
    """Create a LocaleNode reading YAML from a single resource root."""
    node = LocaleNode(
        code, config=config, resource_paths=[root], readers=[YAMLResourceReader()]
    )
    if initialize:
        node.initialize()
    return node


def make_g11n(
    root: Path,
    codes: Sequence[str] = ("en", "en_US", "fr"),
    fallback: Optional[str] = None,
    storage: Optional[Cache] = None,
    with_translator: bool = True,
) -> G11n:
    """Create a registry with the given locales registered in order.

    Args:
        root: Resource root for every locale.
        codes: Locale codes to register.
        fallback: Fallback override (default: whatever registration picks).
        storage: Catalog cache for the translator.
        with_translator: Attach a MessageTranslator reading YAML.

    Returns:
        G11n instance.
    """
    g11n = G11n()
    if with_translator:
        g11n.set_translator(
            MessageTranslator(readers=[YAMLResourceReader()], storage=storage)
        )
    for code in codes:
        g11n.add_locale(make_locale_node(code, root))
    if fallback:
        g11n.set_fallback(fallback)
    return g11n
