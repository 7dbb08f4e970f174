"""
Schémas Pydantic pour l'authentification de l'administrateur.
"""

from pydantic import BaseModel


class AdminLoginRequest(BaseModel):
    password: str


class AdminTokenResponse(BaseModel):
    """Jeton bearer retourné après connexion de l'administrateur."""
    access_token: str
    token_type: str = "bearer"
    expires_in: int  # secondes
