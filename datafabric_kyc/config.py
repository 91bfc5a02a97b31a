"""Environment-based transport defaults for the KYC client."""

from pydantic_settings import BaseSettings

VERSION = "1.0.0"
USER_AGENT = f"DataFabric-KYC-SDK/{VERSION}"

# API keys issued for the sandbox carry this prefix
TEST_KEY_PREFIX = "dfb_test_"


class Settings(BaseSettings):
    """Client transport settings, loaded from DATAFABRIC_KYC_* variables."""

    BASE_URL: str = "https://datafabric.hiroshiaki.com"

    # Overall request timeout vs. connection establishment
    TIMEOUT_SECONDS: float = 30.0
    CONNECT_TIMEOUT: float = 10.0

    model_config = {"env_prefix": "DATAFABRIC_KYC_", "case_sensitive": True}


settings = Settings()
