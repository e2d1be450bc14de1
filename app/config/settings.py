from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List


class Settings(BaseSettings):
    # Supabase
    supabase_url: str = ""
    supabase_key: str = ""
    supabase_service_role_key: Optional[str] = None  # Server-side handlers use the admin client when set

    # Storage
    community_images_bucket: str = "community-images"
    max_image_bytes: int = 5 * 1024 * 1024

    # Geocoding / location lookup
    opencage_api_key: Optional[str] = None
    opencage_url: str = "https://api.opencagedata.com/geocode/v1/json"
    restcountries_url: str = "https://restcountries.com/v3.1/all"
    countriesnow_url: str = "https://countriesnow.space/api/v0.1/countries/states"
    http_timeout_seconds: float = 10.0

    # App
    app_name: str = "community-backend"
    debug: bool = False
    environment: str = "development"  # development | staging | production
    log_level: str = "INFO"
    cors_origins: str = "http://localhost:3000,http://127.0.0.1:3000"
    rate_limit: str = "100/minute"  # slowapi format, e.g. "100/minute"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def get_cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",  # No prefix needed
        extra="ignore"
    )


settings = Settings()
