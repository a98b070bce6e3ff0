"""Feature-level fixtures for g11n tests.

Provides a resource tree on disk and registries built on top of it.
"""

import pytest

from g11n import MemoryCache, MessageTranslator, YAMLResourceReader
from g11n.configuration import BUNDLED_RESOURCES
from g11n.factory import create_g11n
from tests.factories.g11n import make_g11n, make_resource_root


@pytest.fixture
def resource_root(tmp_path):
    """Create a resource root with en, en_US (parent en) and fr locales.

    Returns a directory structure like:
    - locales/en/{locale,formats,inflections,validations}.yml
    - locales/en_US/{locale,formats}.yml
    - locales/fr/{locale,formats,validations}.yml
    - messages/{en,en_US,fr}/default.yml
    - shop/messages/en/cart.yml
    """
    return make_resource_root(tmp_path / "resources")


@pytest.fixture
def g11n(resource_root):
    """Registry with en, en_US and fr registered and en as fallback."""
    return make_g11n(resource_root)


@pytest.fixture
def cached_g11n(resource_root):
    """Registry whose translator stores catalogs in a MemoryCache."""
    return make_g11n(resource_root, storage=MemoryCache())


@pytest.fixture
def translator():
    """Standalone MessageTranslator reading YAML."""
    return MessageTranslator(readers=[YAMLResourceReader()])


@pytest.fixture
def bundled_g11n():
    """Registry over the resources shipped with the package."""
    return create_g11n(locales=["en"], resource_paths=[BUNDLED_RESOURCES])


@pytest.fixture
def accept_language_headers():
    """Collection of Accept-Language headers for testing."""
    return {
        "simple_en": "en",
        "specific_en_us": "en-US",
        "with_quality": "en-US,en;q=0.9,fr;q=0.8",
        "french_first": "fr,en-US;q=0.8",
        "unsupported": "de-DE,de;q=0.9",
        "wildcard": "*",
    }
