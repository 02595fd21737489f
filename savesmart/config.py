from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import Field

from savesmart.cache import RECIPES_TTL


class Settings(BaseSettings):
    google_credentials_path: str = Field(
        "./credentials/google_service_account.json",
        alias="GOOGLE_CREDENTIALS_PATH",
    )
    google_credentials_json: Optional[str] = Field(
        None, alias="GOOGLE_CREDENTIALS_JSON"
    )
    google_spreadsheet_id: str = Field("", alias="GOOGLE_SPREADSHEET_ID")

    anthropic_api_key: str = Field("", alias="ANTHROPIC_API_KEY")
    anthropic_model: str = Field("claude-sonnet-4-6", alias="ANTHROPIC_MODEL")

    recipe_cache_ttl: int = Field(RECIPES_TTL, alias="RECIPE_CACHE_TTL")  # seconds

    host: str = Field("0.0.0.0", alias="HOST")
    port: int = Field(8000, alias="PORT")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    model_config = {"env_file": ".env", "populate_by_name": True, "extra": "ignore"}


settings = Settings()
