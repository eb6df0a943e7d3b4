from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Remote content API (Strapi-style REST)
    content_api_url: str = "http://localhost:1337"
    content_api_token: str | None = None
    request_timeout_seconds: float = 20.0

    # Page sizes per call site
    default_page_size: int = 10
    listings_page_size: int = 12
    featured_limit: int = 6
    curation_page_size: int = 100

    log_level: str = "INFO"


settings = Settings()
