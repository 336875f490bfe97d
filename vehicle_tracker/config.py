"""
Configuration de l'application / Application configuration.
Utilise pydantic-settings pour charger depuis .env ou variables d'environnement.
"""

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "Vehicle Tracker"
    APP_VERSION: str = "0.1.0"
    ENVIRONMENT: str = "development"

    # Database - SQLite par défaut pour le développement
    # Database - SQLite by default for development
    DATABASE_URL: str = "sqlite+aiosqlite:///./vehicle_tracker.db"
    SQL_ECHO: bool = False

    # Serveur / Server
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # CORS - origines autorisées / allowed origins
    CORS_ORIGINS: list[str] = ["http://localhost:3000", "http://127.0.0.1:3000", "http://localhost:3001"]
    FRONTEND_URL: str | None = None

    # Rate Limiting
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_LOGIN: str = "5/minute"
    RATE_LIMIT_REGISTER: str = "3/minute"

    # Vehicules de demonstration au demarrage / Demo vehicles on startup
    SEED_DEMO_VEHICLES: bool = False
    DEMO_VEHICLE_COUNT: int = 5

    # Historique de positions / Location history
    HISTORY_LIMIT: int = Field(default=100, ge=1)

    # Simulateur GPS / GPS simulator
    SIMULATOR_API_URL: str = "http://localhost:3000"
    SIMULATOR_INTERVAL_SECONDS: float = 5.0
    SIMULATOR_INITIAL_DELAY_SECONDS: float = 1.0
    SIMULATOR_MAX_OFFSET: float = 0.01

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @property
    def DEBUG(self) -> bool:
        return self.ENVIRONMENT == "development"

    @property
    def allowed_origins(self) -> list[str]:
        """Origines CORS + FRONTEND_URL / CORS origins plus FRONTEND_URL."""
        origins = list(self.CORS_ORIGINS)
        if self.FRONTEND_URL and self.FRONTEND_URL not in origins:
            origins.append(self.FRONTEND_URL)
        return origins


settings = Settings()
