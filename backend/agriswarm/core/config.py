from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    APP_NAME: str = "AgriSwarm API"
    APP_VERSION: str = "2.0.0"

    # Persistence sink (any SQLAlchemy URL)
    DATABASE_URL: str = "sqlite:///./agriswarm.db"
    PERSIST_READINGS: bool = True

    # Logging
    LOG_DIR: str = "logs"
    LOG_LEVEL: str = "INFO"

    # CORS
    CORS_ORIGINS: List[str] = ["*"]

    # Demo farm constants
    CROP: str = "wheat"
    BASE_PRICE: float = 50.0          # PKR per kg
    WATER_POOL_L: float = 10000.0
    FERTILIZER_POOL_KG: float = 500.0
    LABOR_POOL: float = 10.0

    # Rolling history sizes
    PRICE_HISTORY_SIZE: int = 90
    READING_HISTORY_SIZE: int = 100

    # Fixed seed makes the sampler reproducible
    RANDOM_SEED: Optional[int] = None

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
