import logging
import os

from pydantic_settings import BaseSettings

from wheel_analyzer.core.models import AnalysisConfig

LOG_FORMAT = "%(asctime)s %(levelname)s:%(name)s:%(message)s"


class Settings(BaseSettings):
    db_dsn: str = os.getenv("DB_DSN", "sqlite:///./data/wheel.db")
    api_key: str | None = os.getenv("API_KEY")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    recent_spins_window: int = int(os.getenv("RECENT_SPINS_WINDOW", 15))
    hot_threshold: float = float(os.getenv("HOT_THRESHOLD", 0.35))
    cold_threshold: float = float(os.getenv("COLD_THRESHOLD", 0.10))
    frequency_weight: float = float(os.getenv("FREQUENCY_WEIGHT", 0.6))
    hot_cold_weight: float = float(os.getenv("HOT_COLD_WEIGHT", 0.2))
    trend_weight: float = float(os.getenv("TREND_WEIGHT", 0.2))

    def analysis_config(self, **overrides) -> AnalysisConfig:
        fields = {name: getattr(self, name) for name in AnalysisConfig.model_fields}
        fields.update({k: v for k, v in overrides.items() if v is not None})
        return AnalysisConfig(**fields)


settings = Settings()


def configure_logging(level: str | None = None):
    logging.basicConfig(level=(level or settings.log_level).upper(), format=LOG_FORMAT)
