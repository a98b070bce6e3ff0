"""Factory functions for creating a configured G11n registry."""

from pathlib import Path
from typing import Optional, Sequence

from g11n.cache import Cache, MemoryCache
from g11n.configuration import G11nSettings, settings as app_settings
from g11n.loader import create_readers
from g11n.locale import LocaleNode
from g11n.logging import get_module_logger
from g11n.registry import G11n
from g11n.translator import MessageTranslator

logger = get_module_logger()


def create_g11n(
    settings: Optional[G11nSettings] = None,
    locales: Optional[Sequence[str]] = None,
    fallback: Optional[str] = None,
    cache: Optional[Cache] = None,
    resource_paths: Optional[Sequence[Path]] = None,
) -> G11n:
    """Create a registry with its translator and locales.

    Args:
        settings: G11n settings (default: application settings).
        locales: Locale codes to register (default: settings.LOCALES).
        fallback: Fallback locale code (default: settings.FALLBACK_LOCALE, else
            the first registered locale).
        cache: Catalog cache (default: a MemoryCache when CACHE_ENABLED).
        resource_paths: Resource roots (default: settings.resource_roots).

    Returns:
        G11n: Configured registry, ready to be forked per request.

    Raises:
        MissingLocaleError: If the fallback is not among the registered locales.

    Usage:
        # Use defaults from the environment
        g11n = create_g11n()

        # Explicit locales and resources
        g11n = create_g11n(locales=["en", "fr_CA"], resource_paths=[Path("res")])
    """
    settings = settings or app_settings.g11n
    locales = list(locales if locales is not None else settings.LOCALES)
    fallback = fallback or settings.FALLBACK_LOCALE
    roots = (
        [Path(path) for path in resource_paths]
        if resource_paths is not None
        else settings.resource_roots
    )

    if cache is None and settings.CACHE_ENABLED:
        cache = MemoryCache()

    readers = create_readers(settings.READERS)
    translator = MessageTranslator(
        readers=readers,
        storage=cache,
        default_domain=settings.DEFAULT_DOMAIN,
    )

    g11n = G11n()
    g11n.set_translator(translator)

    for code in locales:
        g11n.add_locale(LocaleNode(code, resource_paths=roots, readers=readers))

    if fallback:
        g11n.set_fallback(fallback)

    logger.info(
        "g11n_created",
        locales=[node.code for node in g11n.get_locales().values()],
        fallback=g11n.get_fallback().code if g11n.get_fallback() else None,
        cache_enabled=cache is not None,
    )
    return g11n
