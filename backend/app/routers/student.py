"""
Router côté étudiant : vérification du couple email / token.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from app.database import get_db
from app.schemas.login import VerifyRequest, VerifyResponse
from app.services import login_service
from app.services.exceptions import InvalidCredentialsError, TokenExpiredError

router = APIRouter(prefix="/api/v1/student", tags=["Étudiants"])


@router.post("/verify", response_model=VerifyResponse, summary="Vérifier un token étudiant")
def verify(request: Request, data: Optional[VerifyRequest] = None, db: Session = Depends(get_db)):
    """
    Vérifie l'accès d'un étudiant et retourne le lien du cours.
    Chaque tentative est enregistrée dans l'historique des connexions,
    y compris lorsque l'email ou le token est absent.
    """
    data = data or VerifyRequest()
    ip = request.client.host if request.client else None
    user_agent = request.headers.get("user-agent")
    try:
        return login_service.verify_login(db, data.email, data.token, ip=ip, user_agent=user_agent)
    except TokenExpiredError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except InvalidCredentialsError as e:
        raise HTTPException(status_code=401, detail=str(e))
