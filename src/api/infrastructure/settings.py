"""Application settings using pydantic-settings.

Settings are loaded from environment variables with sensible defaults
for development. Production deployments should set all values explicitly.
"""

from functools import lru_cache

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DynamoDBSettings(BaseSettings):
    """Single-table DynamoDB settings.

    Environment variables:
        TENANT_SITES_DYNAMODB_TABLE_NAME: Table holding tenant records (default: TenantSites)
        TENANT_SITES_DYNAMODB_REGION: AWS region (default: resolved by boto3)
        TENANT_SITES_DYNAMODB_ENDPOINT_URL: Override endpoint, e.g. DynamoDB Local
        TENANT_SITES_DYNAMODB_DOMAIN_INDEX_NAME: GSI mapping hostnames to tenants (default: GSI_Domain)
        TENANT_SITES_DYNAMODB_DOMAIN_ATTRIBUTE: Partition key of the domain GSI (default: Domain)
        TENANT_SITES_DYNAMODB_CONSISTENT_READS: Strongly consistent point lookups (default: false)
        TENANT_SITES_DYNAMODB_MAX_ATTEMPTS: botocore retry attempts per call (default: 3)
        TENANT_SITES_DYNAMODB_CONNECT_TIMEOUT_SECONDS: Connect timeout (default: 2.0)
        TENANT_SITES_DYNAMODB_READ_TIMEOUT_SECONDS: Read timeout (default: 5.0)
    """

    model_config = SettingsConfigDict(
        env_prefix="TENANT_SITES_DYNAMODB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    table_name: str = Field(
        default="TenantSites", description="DynamoDB table name", min_length=3
    )
    region: str | None = Field(default=None, description="AWS region")
    endpoint_url: str | None = Field(
        default=None, description="Custom DynamoDB endpoint URL"
    )
    domain_index_name: str = Field(
        default="GSI_Domain", description="GSI used for hostname lookups"
    )
    domain_attribute: str = Field(
        default="Domain", description="Partition key attribute of the domain GSI"
    )
    consistent_reads: bool = Field(
        default=False, description="Use strongly consistent point lookups"
    )
    max_attempts: int = Field(
        default=3,
        description="botocore retry attempts per request",
        ge=1,
        le=10,
    )
    connect_timeout_seconds: float = Field(
        default=2.0, description="Connect timeout in seconds", gt=0
    )
    read_timeout_seconds: float = Field(
        default=5.0, description="Read timeout in seconds", gt=0
    )


class SitesSettings(BaseSettings):
    """Site resolution settings.

    Environment variables:
        TENANT_SITES_DEFAULT_COUNTRY_CODE: Country pack used for missing or
            unknown country codes (default: RO)
        TENANT_SITES_RESOLVE_MAX_ATTEMPTS: Attempts per resolution when the
            store is unavailable (default: 2)
        TENANT_SITES_CONTEXT_PAGE_SIZE: Default context listing page size (default: 50)
        TENANT_SITES_CONTEXT_MAX_PAGE_SIZE: Largest page a caller may request (default: 100)
    """

    model_config = SettingsConfigDict(
        env_prefix="TENANT_SITES_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    default_country_code: str = Field(
        default="RO",
        description="Fallback country pack code",
    )
    resolve_max_attempts: int = Field(
        default=2,
        description="Attempts per site resolution on store unavailability",
        ge=1,
        le=5,
    )
    context_page_size: int = Field(
        default=50,
        description="Default context listing page size",
        ge=1,
        le=100,
    )
    context_max_page_size: int = Field(
        default=100,
        description="Maximum context listing page size",
        ge=1,
        le=100,
    )

    @field_validator("default_country_code")
    @classmethod
    def validate_country_code(cls, value: str) -> str:
        """Normalize to an upper-case two-letter code."""
        code = value.strip().upper()
        if len(code) != 2 or not code.isalpha():
            raise ValueError(
                f"default_country_code must be a 2-letter code, got {value!r}"
            )
        return code

    @model_validator(mode="after")
    def validate_page_sizes(self) -> "SitesSettings":
        """Validate max page size >= default page size."""
        if self.context_max_page_size < self.context_page_size:
            raise ValueError(
                f"context_max_page_size ({self.context_max_page_size}) must be >= "
                f"context_page_size ({self.context_page_size})"
            )
        return self


class Settings(BaseSettings):
    """Main application settings aggregating all configuration sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application metadata
    app_name: str = Field(default="Tenant Sites API", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")
    log_level: str = Field(default="INFO", description="Minimum log level")

    @property
    def dynamodb(self) -> DynamoDBSettings:
        """Get DynamoDB settings."""
        return get_dynamodb_settings()

    @property
    def sites(self) -> SitesSettings:
        """Get site resolution settings."""
        return get_sites_settings()


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


@lru_cache
def get_dynamodb_settings() -> DynamoDBSettings:
    """Get cached DynamoDB settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return DynamoDBSettings()


@lru_cache
def get_sites_settings() -> SitesSettings:
    """Get cached site resolution settings."""
    return SitesSettings()
