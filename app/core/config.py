from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import SecretStr, computed_field, model_validator


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    APP_PORT: int = 8001
    LOG_LEVEL: str = "INFO"

    AI_GATEWAY_URL: str = "https://ai.gateway.lovable.dev/v1/chat/completions"
    AI_GATEWAY_API_KEY: SecretStr = SecretStr("")
    AI_MODEL: str = "google/gemini-2.5-flash"
    AI_GATEWAY_TIMEOUT_SECONDS: float = 30.0

    MIN_INGREDIENTS: int = 1
    MAX_INGREDIENTS: int = 50
    MAX_INGREDIENT_LENGTH: int = 100

    CORS_ALLOW_ORIGIN: str = "*"
    CORS_ALLOW_HEADERS: str = "authorization, x-client-info, apikey, content-type"

    @model_validator(mode="after")
    def check_limits_are_consistent(self):
        invalid_fields = []
        if self.AI_GATEWAY_TIMEOUT_SECONDS <= 0:
            invalid_fields.append("AI_GATEWAY_TIMEOUT_SECONDS")
        if self.MIN_INGREDIENTS < 1 or self.MIN_INGREDIENTS > self.MAX_INGREDIENTS:
            invalid_fields.append("MIN_INGREDIENTS")
        if self.MAX_INGREDIENT_LENGTH <= 0:
            invalid_fields.append("MAX_INGREDIENT_LENGTH")

        if invalid_fields:
            raise ValueError(
                f"Invalid values for environment variables: {','.join(invalid_fields)}"
            )

        return self

    @computed_field
    @property
    def CORS_HEADERS(self) -> dict[str, str]:
        return {
            "Access-Control-Allow-Origin": self.CORS_ALLOW_ORIGIN,
            "Access-Control-Allow-Headers": self.CORS_ALLOW_HEADERS,
        }


settings = Settings()
