from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    backend_provider: str = "http"
    backend_base_url: str = "http://localhost:8080"
    backend_timeout_seconds: int = 30

    # Extraction heuristics. Document photos are large, so short base64-looking
    # tokens (ids, hashes) stay below the threshold.
    scan_min_base64_length: int = 5000
    scan_max_candidates: int = 4000
    default_media_type: str = "image/jpeg"

    # Pages whose payload lengths differ by less than this are treated as the
    # same capture re-reported by the device.
    duplicate_length_tolerance: int = 50
    max_buffered_pages: int = 4

    page_light: int = 6
    process_scenario: str = "FullProcess"
