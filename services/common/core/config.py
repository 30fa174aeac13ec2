"""
Where: services/common/core/config.py
What: Settings shared by every service process.
Why: Logging, outbound HTTP and observability switches are read the same way
     everywhere; each service config extends BaseAppConfig.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class BaseAppConfig(BaseSettings):
    """
    Common application settings.
    """

    # ===== Logging =====
    LOG_LEVEL: str = Field(default="INFO", description="Log level")
    LOG_CONFIG_PATH: str = Field(
        default="config/catalog_log.yaml", description="YAML logging config path"
    )

    # ===== Outbound HTTP =====
    VERIFY_SSL: bool = Field(default=False, description="Verify TLS certificates on HTTP calls")
    HTTP_MAX_CONNECTIONS: int = Field(default=100, ge=1, description="HTTP pool size")
    HTTP_MAX_KEEPALIVE: int = Field(default=20, ge=0, description="Idle HTTP connections kept")

    # ===== Observability =====
    OTEL_EXPORTER_OTLP_ENDPOINT: str = Field(
        default="", description="OTLP/HTTP collector base URL (empty disables export)"
    )
    METRICS_ENABLED: bool = Field(default=True, description="Expose Prometheus metrics")

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=True, extra="ignore"
    )
