from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "PaperSmith"
    env: str = "dev"
    cors_origins: str = "http://localhost:5173"
    log_level: str = "INFO"

    question_source: str = "inmemory"  # inmemory|mongo
    storage_backend: str = "file"  # inmemory|file|mongo
    storage_dir: str = ".papersmith"
    storage_collection: str = "question-paper-storage"
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_db: str = "papersmith"

    # External generation; earlier models are preferred.
    llm_provider: str = "gemini"
    external_models: list[str] = ["gemini-2.0-flash-exp", "gemini-1.5-flash", "gemini-pro"]
    external_pool_cap: int = 50
    external_backoff_s: float = 2.0
    external_attempt_timeout_s: float = 60.0
    llm_temperature: float = 0.4
    llm_max_output_tokens: int = 4096

    gemini_api_key: str | None = None
    gemini_base_url: str | None = None
    openai_api_key: str | None = None
    openai_base_url: str | None = None
    anthropic_api_key: str | None = None
    anthropic_base_url: str | None = None
    anthropic_version: str | None = None
    groq_api_key: str | None = None
    groq_base_url: str | None = None

    # Observability (OpenTelemetry)
    observability_enabled: bool = False
    otel_service_name: str = "papersmith"
    otel_exporter_otlp_endpoint: str | None = None
    otel_exporter_console: bool = False
    otel_sample_rate: float = 0.1


settings = Settings()
