"""
Configuration de la connexion à la base de données.
SQLAlchemy synchrone sur un fichier SQLite (une base par cours, faible charge).
"""

import logging
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base
from sqlalchemy.orm import Session, sessionmaker

from app.config import settings
from app.services.exceptions import StorageError

logger = logging.getLogger(__name__)

# SQLite refuse par défaut qu'une connexion change de thread (threadpool FastAPI)
connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(settings.DATABASE_URL, connect_args=connect_args)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """Dépendance FastAPI : fournit une session BDD et la ferme après usage."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """Crée les tables manquantes (idempotent). Appelé au démarrage de l'API."""
    import app.models  # noqa: F401  enregistre les modèles dans Base.metadata

    Base.metadata.create_all(bind=engine)


@contextmanager
def storage_errors(db: Session, action: str):
    """
    Traduit toute erreur SQLAlchemy en StorageError après rollback.
    Les exceptions métier levées dans le bloc ne sont pas interceptées.
    """
    try:
        yield
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("Erreur base de données pendant %s : %s", action, exc, exc_info=True)
        raise StorageError(f"Erreur de stockage pendant {action}.") from exc
