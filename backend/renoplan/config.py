from pydantic_settings import BaseSettings


# Models that require max_completion_tokens instead of max_tokens
_MAX_COMPLETION_TOKENS_MODELS = {"gpt-5.2", "gpt-5", "o1", "o3", "o3-mini", "o1-mini"}


class Settings(BaseSettings):
    database_url: str = "postgresql+asyncpg://renoplan@localhost:5432/renoplan"
    openai_api_key: str = ""
    openai_base_url: str | None = None
    openai_model: str = "gpt-4o-mini"
    app_env: str = "development"
    cors_origins: str = "http://localhost:5173"
    log_level: str = "INFO"
    log_json: bool = False

    jwt_secret: str = "change-me"
    jwt_algorithm: str = "HS256"

    # Locale every plan is priced and regulated against
    plan_location: str = "Chesterfield County, Virginia"
    plan_max_tokens: int = 4000

    create_limit: int = 5
    create_window_seconds: int = 15 * 60
    generate_limit: int = 3
    generate_window_seconds: int = 30 * 60
    plan_limit: int = 3
    plan_window_seconds: int = 30 * 60
    general_limit: int = 100
    general_window_seconds: int = 15 * 60

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    def max_tokens_param(self, n: int) -> dict:
        """Return the right max-tokens kwarg for the current model."""
        if self.openai_model in _MAX_COMPLETION_TOKENS_MODELS:
            return {"max_completion_tokens": n}
        return {"max_tokens": n}


settings = Settings()
