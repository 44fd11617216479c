# catalog_nlp/core/config.py

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    ENV: str = "local"

    LOG_LEVEL: str = "INFO"
    LOG_FILE: str | None = None

    DATA_PATH: str = "data/nasa_metadata.json"
    REPORT_DIR: str = "reports"
    PIPELINE_CONFIG: str | None = None  # falls back to the bundled yaml

    NUM_TOPICS: int = 24
    RANDOM_STATE: int = 1234
    TOPIC_BACKEND: str = "sklearn"  # "sklearn" | "gensim"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
