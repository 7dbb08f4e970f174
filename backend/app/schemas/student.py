"""
Schémas Pydantic pour les étudiants et l'émission des tokens d'accès.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel


class TokenIssueRequest(BaseModel):
    """Schéma de génération d'un token (POST /admin/generate-token)."""
    email: str  # validé par token_service (doit contenir '@')


class TokenIssueResponse(BaseModel):
    """Token émis ou réactivé pour un étudiant."""
    success: bool = True
    student_id: int
    token: str
    expires_at: datetime


class StudentResponse(BaseModel):
    """Schéma de réponse pour un étudiant (GET /admin/students)."""
    id: int
    email: str
    token: str
    created_at: datetime
    expires_at: datetime
    is_active: bool
    last_login: Optional[datetime] = None
    last_ip: Optional[str] = None

    model_config = {"from_attributes": True}
