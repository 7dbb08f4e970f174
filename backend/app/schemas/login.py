"""
Schémas Pydantic pour la vérification des connexions étudiantes et leur historique.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class VerifyRequest(BaseModel):
    """Champs absents ou vides acceptés : la tentative est refusée et journalisée par login_service."""
    email: str = ""
    token: str = ""


class VerifyResponse(BaseModel):
    """Connexion acceptée : l'étudiant est redirigé vers le cours."""
    success: bool = True
    redirect: str
    message: str = "Connexion réussie ! Redirection vers le cours..."


class LoginHistoryResponse(BaseModel):
    id: int
    student_id: Optional[int]
    email: Optional[str]
    ip: Optional[str]
    user_agent: Optional[str]
    login_time: datetime
    success: bool

    model_config = {"from_attributes": True}
