"""Configuration using pydantic-settings."""

from pydantic import Field
from pydantic_settings import BaseSettings

# Largest slice of encoded text returned by one invocation.
MAX_RESPONSE_LEN = 6_291_456


class FetcherSettings(BaseSettings):
    """Fetcher configuration."""

    timeout: float = 30.0
    user_agent: str = "chunkfetch/0.1"
    verify_tls: bool = True
    max_redirects: int = 10
    page_size: int = Field(MAX_RESPONSE_LEN, gt=0)
    max_connections: int = 100
    max_keepalive_connections: int = 20
    log_level: str = "INFO"
    log_json: bool = True

    model_config = {"env_prefix": "CHUNKFETCH_"}


settings = FetcherSettings()
