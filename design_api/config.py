from pydantic_settings import BaseSettings, SettingsConfigDict

MiB = 1024 * 1024


class Settings(BaseSettings):
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "DEBUG"

    perplexity_api_key: str = ""  # Empty = provider not configured; analysis requests fail with 500
    provider_url: str = "https://api.perplexity.ai/chat/completions"
    model_name: str = "sonar-pro"
    max_tokens: int = 4096
    temperature: float = 0.2
    provider_timeout: float | None = None  # None = no client-side timeout

    max_image_bytes: int = 50 * MiB
    # Base64 inflates by 4/3; leave room for the JSON envelope
    max_request_bytes: int = 68 * MiB

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
