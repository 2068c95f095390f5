from pydantic import Field
from pydantic_settings import BaseSettings
from typing import List, Optional

class Settings(BaseSettings):
    # App Info
    app_name: str = "Centymo Back Office"
    version: str = "1.0.0"
    debug: bool = False

    # Logging
    log_level: str = Field(default="INFO", description="DEBUG, INFO, WARNING, ERROR, CRITICAL")
    log_json: bool = Field(default=False, description="Emitir logs estructurados en JSON")

    # Database
    database_url: str = "sqlite:///./centymo.db"
    datasource_backend: str = Field(
        default="sql",
        description="Backend del DataSource: 'sql' (SQLAlchemy) o 'memory'"
    )

    # Defaults de negocio
    default_currency: str = "PHP"
    default_location: str = "ayala-central-bloc"

    # Labels / i18n
    labels_file: Optional[str] = Field(
        default=None,
        description="Archivo JSON con overrides de labels"
    )

    # Assets
    static_target_dir: Optional[str] = Field(
        default=None,
        description="Directorio donde copiar css/js al arrancar"
    )

    # CORS
    allowed_origins: List[str] = ["http://localhost:3000", "http://localhost:8000"]

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    class Config:
        env_file = ".env"
        case_sensitive = False

settings = Settings()
