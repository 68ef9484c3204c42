from typing import List, Optional, Tuple, Type, Dict, Any
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict, PydanticBaseSettingsSource
import yaml
import os

class YamlConfigSettingsSource(PydanticBaseSettingsSource):
    """
    A simple settings source that loads variables from a YAML file
    at the project's config/config.yaml location.
    """
    def get_field_value(self, field: Any, field_name: str) -> Tuple[Any, str, bool]:
        pass

    def __call__(self) -> Dict[str, Any]:
        config_file = os.getenv("CONFIG_FILE", "config/config.yaml")
        if os.path.exists(config_file):
            with open(config_file) as f:
                return yaml.safe_load(f) or {}
        return {}

class Config(BaseSettings):
    # Environment
    env: str = Field("development", description="Environment: development, staging, production")
    debug: bool = False

    # Upstream prediction-market API
    api_base_url: str = "https://api-testnet.predict.fun"
    predict_api_key: Optional[str] = None
    request_timeout: float = 30.0

    # Relay server
    host: str = "0.0.0.0"
    port: int = 3000
    cors_origins: List[str] = ["*"]

    # Chain (BNB Smart Chain)
    chain_id: int = 56
    rpc_url: str = "https://bsc-dataseed.binance.org/"

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = "logs/relay.log"

    @property
    def is_configured(self) -> bool:
        return bool(self.predict_api_key)

    def validate_upstream(self) -> tuple[bool, str]:
        """
        Validate configuration for talking to the upstream API.

        Returns:
            Tuple of (is_valid, error_message)
        """
        if not self.api_base_url.startswith(("http://", "https://")):
            return False, "API_BASE_URL must start with http:// or https://"

        if not self.predict_api_key:
            return False, "PREDICT_API_KEY not set"

        return True, "Configuration valid"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )
