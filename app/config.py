from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "postgresql+asyncpg://localhost:5432/habits"
    scoring_api_key: str | None = None

    # Fail fast on renamed category keys ("knowledge"). Leave on outside production.
    strict_validation: bool = True

    log_level: str = "INFO"
    log_format: str = "text"  # "text" | "json"

    # Badge check: how far back to look for active days
    streak_lookback_days: int = 120

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
