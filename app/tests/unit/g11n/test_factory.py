"""Tests for g11n.factory module."""

import pytest

from g11n.cache import MemoryCache
from g11n.configuration import BUNDLED_RESOURCES, G11nSettings
from g11n.exceptions import MissingLocaleError
from g11n.factory import create_g11n
from g11n.loader import JSONResourceReader, YAMLResourceReader
from g11n.translator import MessageTranslator


class TestCreateG11n:
    """Tests for create_g11n()."""

    def test_registers_configured_locales(self, resource_root):
        """Locales from settings are registered with their parents."""
        settings = G11nSettings(LOCALES=["en_US", "fr"], FALLBACK_LOCALE="fr")

        g11n = create_g11n(settings=settings, resource_paths=[resource_root])

        assert list(g11n.get_locales()) == ["en-us", "en", "fr"]
        assert g11n.get_fallback().code == "fr"

    def test_translator_attached(self, resource_root):
        """A MessageTranslator with the configured readers is attached."""
        settings = G11nSettings(READERS=["yaml", "json"], DEFAULT_DOMAIN="app")

        g11n = create_g11n(
            settings=settings, locales=["en"], resource_paths=[resource_root]
        )
        translator = g11n.get_translator()

        assert isinstance(translator, MessageTranslator)
        assert translator.default_domain == "app"
        assert [type(r) for r in translator.readers] == [
            YAMLResourceReader,
            JSONResourceReader,
        ]

    def test_cache_enabled(self, resource_root):
        """A MemoryCache is attached when caching is enabled."""
        g11n = create_g11n(
            settings=G11nSettings(CACHE_ENABLED=True),
            locales=["en"],
            resource_paths=[resource_root],
        )
        assert isinstance(g11n.get_translator().storage, MemoryCache)

    def test_cache_disabled(self, resource_root):
        g11n = create_g11n(
            settings=G11nSettings(CACHE_ENABLED=False),
            locales=["en"],
            resource_paths=[resource_root],
        )
        assert g11n.get_translator().storage is None

    def test_explicit_cache(self, resource_root):
        cache = MemoryCache()
        g11n = create_g11n(locales=["en"], cache=cache, resource_paths=[resource_root])
        assert g11n.get_translator().storage is cache

    def test_unknown_fallback_raises(self, resource_root):
        with pytest.raises(MissingLocaleError):
            create_g11n(locales=["en"], fallback="de", resource_paths=[resource_root])

    def test_no_locales_is_disabled(self):
        g11n = create_g11n(settings=G11nSettings(LOCALES=[]))
        assert not g11n.is_enabled()

    def test_end_to_end(self, resource_root):
        """Detection and translation through a forked registry."""
        g11n = create_g11n(locales=["en", "en_US", "fr"], resource_paths=[resource_root])

        request_g11n = g11n.fork()
        request_g11n.initialize(accept_language="de;q=1.0,fr;q=0.9")

        # Everything after the first weight is ignored
        assert request_g11n.current().code == "en"

        request_g11n.initialize(accept_language="fr,en;q=0.5")
        assert request_g11n.translate("default.greeting") == "Bonjour"


class TestSettings:
    """Tests for G11nSettings."""

    def test_defaults(self):
        settings = G11nSettings()
        assert settings.DEFAULT_DOMAIN == "core"
        assert settings.CACHE_ENABLED is True

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("G11N_DEFAULT_DOMAIN", "app")
        monkeypatch.setenv("G11N_LOCALES", '["en", "fr"]')

        settings = G11nSettings()

        assert settings.DEFAULT_DOMAIN == "app"
        assert settings.LOCALES == ["en", "fr"]

    def test_unknown_reader_rejected(self):
        with pytest.raises(ValueError):
            G11nSettings(READERS=["xml"])

    def test_resource_roots_start_with_bundled(self, tmp_path):
        """Configured roots come after the bundled resources and override them."""
        settings = G11nSettings(RESOURCE_PATHS=[str(tmp_path)])
        assert settings.resource_roots == [BUNDLED_RESOURCES, tmp_path]
