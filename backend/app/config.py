"""
Configuration centrale de l'application via variables d'environnement.
Charger depuis un fichier .env en développement.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Base de données (fichier SQLite par défaut)
    DATABASE_URL: str = "sqlite:///./database.sqlite"

    # JWT : authentification de l'administrateur
    SECRET_KEY: str = "change-me-in-production-with-a-long-random-secret"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24
    ADMIN_PASSWORD: str = ""

    # Tokens d'accès étudiants
    TOKEN_EXPIRY_DAYS: int = 30
    COURSE_LINK: str = ""

    # SMTP : alerte email à l'administrateur à chaque connexion réussie
    ADMIN_EMAIL: str = ""
    SMTP_HOST: str = "localhost"
    SMTP_PORT: int = 587
    SMTP_USERNAME: str = ""
    SMTP_PASSWORD: str = ""
    SMTP_FROM: str = "noreply@student-access.local"
    SMTP_USE_TLS: bool = True
    SMTP_TIMEOUT: float = 10.0

    # Environnement
    ENV: str = "development"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


settings = Settings()
