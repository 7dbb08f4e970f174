"""
Modèle SQLAlchemy pour la table students.
Une ligne par adresse email : le token est remplacé à chaque réactivation.
"""

from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text

from app.database import Base


def utcnow() -> datetime:
    """Horodatage UTC naïf (SQLite ne conserve pas le fuseau)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Student(Base):
    __tablename__ = "students"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), unique=True, nullable=False)   # Sensible à la casse
    token = Column(String(36), unique=True, nullable=False)    # UUID4
    created_at = Column(DateTime, default=utcnow, nullable=False)
    expires_at = Column(DateTime, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    last_login = Column(DateTime, nullable=True)
    last_ip = Column(Text, nullable=True)
