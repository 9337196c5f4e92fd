"""Environment-based configuration for the CCR stats collector."""

from pydantic_settings import BaseSettings

from esmon_ccr.scope import Scope


class Settings(BaseSettings):
    """CCR collector configuration.

    All settings can be overridden via environment variables with
    ESMON_CCR_ prefix. For example:
        ESMON_CCR_ELASTICSEARCH_URL=https://es-prod:9200
        ESMON_CCR_SCOPE=cluster
    """

    # Elasticsearch connection
    elasticsearch_url: str = "http://localhost:9200"
    username: str | None = None
    password: str | None = None
    timeout_seconds: float = 10.0

    # Collection
    scope: Scope = Scope.NODE
    interval_seconds: float = 10.0
    extended: bool = False  # Full field set + monitoring index
    metricset_name: str = "elasticsearch.ccr"

    log_level: str = "INFO"

    model_config = {"env_prefix": "ESMON_CCR_"}
