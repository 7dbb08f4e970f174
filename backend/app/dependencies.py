"""
Dépendances FastAPI partagées entre routers.
"""

from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.services.admin_auth import decode_admin_token
from app.services.exceptions import InvalidCredentialsError

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_admin(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> dict:
    """Exige un JWT administrateur valide dans l'en-tête Authorization (401 sinon)."""
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentification administrateur requise.",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        return decode_admin_token(credentials.credentials)
    except InvalidCredentialsError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )
