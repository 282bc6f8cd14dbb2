"""Root settings model for minicrm configuration."""

from typing import Any, Literal

from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from minicrm.config.models.delivery import DeliveryConfig, SimulationConfig
from minicrm.config.models.observability import ObservabilityConfig
from minicrm.config.models.segments import SegmentsConfig
from minicrm.config.models.suggestions import SuggestionsConfig

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

# TOML config consumed by the custom settings source
_toml_config: dict[str, Any] = {}


def set_toml_config(config: dict[str, Any]) -> None:
    """Set the TOML configuration to be used by Settings."""
    global _toml_config
    _toml_config = config


class TomlConfigSettingsSource(PydanticBaseSettingsSource):
    """Settings source that reads from the loaded TOML configuration."""

    def get_field_value(
        self, field: Any, field_name: str  # noqa: ARG002
    ) -> tuple[Any, str, bool]:
        """Get field value from TOML config."""
        value = _toml_config.get(field_name)
        return value, field_name, value is not None

    def __call__(self) -> dict[str, Any]:
        """Return the TOML config values."""
        return _toml_config.copy()


class Settings(BaseSettings):
    """Root configuration object containing all nested sections.

    Configuration is loaded in this order:
    1. Pydantic model defaults (in code)
    2. config/default.toml
    3. config/{MINICRM_ENV}.toml
    4. MINICRM_* environment variables
    """

    model_config = SettingsConfigDict(
        env_prefix="MINICRM_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = Field(default="minicrm", description="Application name for logging")
    debug: bool = Field(default=False, description="Enable debug mode")

    delivery: DeliveryConfig = Field(
        default_factory=DeliveryConfig,
        description="Campaign log population settings",
    )
    segments: SegmentsConfig = Field(
        default_factory=SegmentsConfig,
        description="Rule evaluation settings",
    )
    suggestions: SuggestionsConfig = Field(
        default_factory=SuggestionsConfig,
        description="Message suggestion provider settings",
    )
    simulation: SimulationConfig = Field(
        default_factory=SimulationConfig,
        description="Delivery simulation settings",
    )
    observability: ObservabilityConfig = Field(
        default_factory=ObservabilityConfig,
        description="Logging settings",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Put the TOML source below constructor arguments and env vars."""
        return (
            init_settings,
            env_settings,
            TomlConfigSettingsSource(settings_cls),
        )
