"""
Modèle SQLAlchemy pour l'historique des tentatives de connexion.

Journal d'audit en ajout seul : une ligne par appel de vérification,
réussi ou non. Aucune ligne n'est modifiée ni supprimée.
"""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, Text

from app.database import Base
from app.models.student import utcnow


class LoginHistory(Base):
    """Tentative de connexion d'un étudiant (token inconnu, expiré ou valide)."""
    __tablename__ = "login_history"

    id = Column(Integer, primary_key=True, autoincrement=True)
    student_id = Column(Integer, ForeignKey("students.id"), nullable=True)  # NULL si aucun couple email/token
    email = Column(Text, nullable=True)  # Valeurs fournies par le client : pas de longueur maximale
    ip = Column(Text, nullable=True)
    user_agent = Column(Text, nullable=True)
    login_time = Column(DateTime, default=utcnow, nullable=False, index=True)
    success = Column(Boolean, nullable=False)
