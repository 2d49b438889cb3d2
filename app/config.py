from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    liteapi_api_key: str
    liteapi_webhook_token: str = ""
    amadeus_api_key: str = ""
    amadeus_api_secret: str = ""
    amadeus_base_url: str = "https://test.api.amadeus.com"
    google_places_api_key: str = ""
    openrouter_api_key: str = ""
    openrouter_model: str = "anthropic/claude-3.5-sonnet"
    app_url: str = "http://localhost:3000"
    supabase_url: str = ""
    supabase_service_key: str = ""
    supabase_anon_key: str = ""
    log_level: str = "INFO"
    book_retry_attempts: int = 3
    book_retry_delay: float = 2.0
