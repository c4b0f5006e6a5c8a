"""Typed runtime settings with dotenv support and startup validation."""

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from acb_ledger.domain import forward_spec_parse


class SettingsLoadError(RuntimeError):
    """Raised when runtime settings cannot be loaded or validated."""


class AppSettings(BaseSettings):
    """Application settings for API runtime and ledger run configuration.

    Environment variable names map directly to field names in uppercase.
    Example: `acb_forward_spec` reads from `ACB_FORWARD_SPEC`.

    Attributes:
        environment_name: Runtime environment label.
        application_host: Host interface for web server binding.
        application_port: Web server port.
        acb_forward_spec: Default carry-forward specification (`ASSET:balance:acb,...`).
        acb_asset_filter: Default comma-separated asset filter; blank admits every asset.
        acb_settle_foreign_fees: Whether fees paid in another tracked asset reduce that asset's ledger.
        acb_strict_empty_disposals: Whether disposing from a zero balance aborts the run.
        api_max_records: Maximum number of records accepted by one API request.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    environment_name: str = Field(default="development")
    application_host: str = Field(default="0.0.0.0")
    application_port: int = Field(default=8000, ge=1, le=65535)
    acb_forward_spec: str = Field(default="")
    acb_asset_filter: str = Field(default="")
    acb_settle_foreign_fees: bool = Field(default=True)
    acb_strict_empty_disposals: bool = Field(default=False)
    api_max_records: int = Field(default=100_000, ge=1)

    @field_validator("environment_name")
    @classmethod
    def _validate_non_empty_string(cls, value: str) -> str:
        stripped_value = value.strip()
        if not stripped_value:
            raise ValueError("value must not be blank")
        return stripped_value

    @field_validator("acb_forward_spec")
    @classmethod
    def _validate_forward_spec(cls, value: str) -> str:
        forward_spec_parse(value)
        return value.strip()


def config_load_settings() -> AppSettings:
    """Load and validate runtime settings from environment and dotenv.

    Returns:
        AppSettings: Validated runtime settings object.

    Raises:
        SettingsLoadError: Raised when settings are invalid.
    """

    try:
        return AppSettings()
    except ValidationError as error:
        raise SettingsLoadError(
            f"Startup configuration validation failed. Update .env or environment variables. Details: {error}"
        ) from error
