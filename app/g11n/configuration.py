"""G11n configuration settings.

Settings are read from the environment (and an optional ``.env`` file) with
pydantic-settings. Locale specific data never lives here; it is read from the
resource roots listed in ``G11N_RESOURCE_PATHS``.

Example:
    ```python
    from g11n.configuration import settings

    if settings.g11n.CACHE_ENABLED:
        ...

    for root in settings.g11n.resource_roots:
        ...
    ```
"""

from pathlib import Path
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resources shipped with the package (``en`` locale data and format messages)
BUNDLED_RESOURCES = Path(__file__).resolve().parent / "resources"


class G11nSettings(BaseSettings):
    """Locale resolution and message lookup settings.

    Environment Variables:
        G11N_RESOURCE_PATHS: JSON list of resource roots, later roots override earlier.
        G11N_DEFAULT_DOMAIN: Domain used for two segment message keys.
        G11N_LOCALES: JSON list of locale codes registered by the factory.
        G11N_FALLBACK_LOCALE: Explicit fallback locale code.
        G11N_CACHE_ENABLED: Attach an in-memory catalog cache to the translator.
        G11N_READERS: JSON list of resource reader kinds (yaml, json, po).
    """

    RESOURCE_PATHS: List[str] = Field(default_factory=list)
    DEFAULT_DOMAIN: str = "core"
    LOCALES: List[str] = Field(default_factory=list)
    FALLBACK_LOCALE: Optional[str] = None
    CACHE_ENABLED: bool = True
    READERS: List[str] = Field(default_factory=lambda: ["yaml", "json", "po"])

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="G11N_",
        case_sensitive=True,
        extra="ignore",
    )

    @field_validator("READERS")
    @classmethod
    def validate_readers(cls, value: List[str]) -> List[str]:
        """Only known reader kinds may be configured."""
        allowed = {"yaml", "json", "po"}
        unknown = [kind for kind in value if kind not in allowed]
        if unknown:
            raise ValueError(f"Unknown resource readers: {', '.join(unknown)}")
        return value

    @property
    def resource_roots(self) -> List[Path]:
        """Bundled resources followed by the configured roots.

        Bundles merge files in path order, so configured roots override the
        bundled data.
        """
        roots = [Path(path) for path in self.RESOURCE_PATHS]
        if BUNDLED_RESOURCES not in roots:
            roots.insert(0, BUNDLED_RESOURCES)
        return roots


class Settings(BaseSettings):
    """Top level settings aggregator.

    Environment Variables:
        PREFIX: Environment prefix, empty in production.
        LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR).
    """

    PREFIX: str = ""
    LOG_LEVEL: str = "INFO"

    g11n: G11nSettings

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    @property
    def is_production(self) -> bool:
        """Check if running in production.

        Returns:
            True if PREFIX is empty (production), False otherwise.
        """
        return not bool(self.PREFIX)

    def __init__(self, **kwargs):
        """Initialize Settings, instantiating sub-settings unless overridden.

        Args:
            **kwargs: Optional overrides for specific settings sections.
        """
        kwargs.setdefault("g11n", G11nSettings())
        super().__init__(**kwargs)


settings = Settings()
