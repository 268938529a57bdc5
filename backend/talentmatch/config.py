from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    database_url: str = "sqlite:///./talentmatch.db"
    log_level: str = "INFO"

    # Origins allowed by the CORS middleware ("*" = any origin)
    cors_origins: list[str] = ["*"]

    # Ranking thresholds (scores are integers 0-100)
    job_match_min_score: int = 90  # candidate -> jobs: only 90%+ matches
    candidate_search_min_score: int = 1  # employer search: any non-zero match

    # Prometheus /metrics endpoint and request middleware
    metrics_enabled: bool = True

    class Config:
        env_file = ".env"


@lru_cache
def get_settings() -> Settings:
    return Settings()
