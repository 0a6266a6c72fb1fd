from pydantic import model_validator
from pydantic_settings import BaseSettings

DEFAULT_DATABASE_URL = "sqlite:///./igilife.db"


class Settings(BaseSettings):
    # Persisted store
    database_url: str = DEFAULT_DATABASE_URL

    # Storage keys (one namespace per collection)
    users_key: str = "igilife_users"
    session_key: str = "user"
    clients_key: str = "igilife_clients"
    leads_key: str = "igilife_quote_leads"
    user_services_key: str = "igilife_user_services"

    # App
    environment: str = "development"
    log_level: str = "INFO"
    log_format: str = "json"  # "json" | "text"

    # Security
    allowed_origins: str = "http://localhost:5173,http://localhost:8080,http://localhost"

    # Portal behaviour
    min_password_length: int = 6
    default_landing_view: str = "dashboard"
    seed_demo_clients: bool = True

    model_config = {"env_file": ".env", "extra": "ignore"}

    @model_validator(mode="after")
    def _validate_production(self):
        if self.environment == "production":
            if self.database_url == DEFAULT_DATABASE_URL:
                raise ValueError(
                    "Production requires an explicit DATABASE_URL"
                )
        if self.log_format not in ("json", "text"):
            raise ValueError("LOG_FORMAT must be 'json' or 'text'")
        return self


settings = Settings()
