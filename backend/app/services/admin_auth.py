"""
Authentification de l'administrateur par mot de passe partagé (ADMIN_PASSWORD).
La connexion réussie délivre un JWT bearer de courte durée.
"""

import hmac
import logging
from datetime import datetime, timedelta, timezone

import jwt

from app.config import settings
from app.schemas.admin import AdminTokenResponse
from app.services.exceptions import InvalidCredentialsError

logger = logging.getLogger(__name__)

ADMIN_SUBJECT = "admin"


def authenticate_admin(password: str) -> AdminTokenResponse:
    """
    Vérifie le mot de passe administrateur (comparaison à temps constant).
    Lève InvalidCredentialsError si le mot de passe est faux ou non configuré.
    """
    expected = settings.ADMIN_PASSWORD
    if not expected or not hmac.compare_digest(password.encode("utf-8"), expected.encode("utf-8")):
        logger.warning("Échec de connexion administrateur")
        raise InvalidCredentialsError("Mot de passe invalide.")

    logger.info("Connexion administrateur réussie")
    return AdminTokenResponse(
        access_token=create_admin_token(),
        expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )


def create_admin_token() -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": ADMIN_SUBJECT,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)).timestamp()),
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_admin_token(token: str) -> dict:
    """Décode et valide un JWT administrateur ; lève InvalidCredentialsError sinon."""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except jwt.ExpiredSignatureError as exc:
        raise InvalidCredentialsError("Session administrateur expirée.") from exc
    except jwt.InvalidTokenError as exc:
        raise InvalidCredentialsError("Token administrateur invalide.") from exc

    if payload.get("sub") != ADMIN_SUBJECT:
        raise InvalidCredentialsError("Token administrateur invalide.")
    return payload
