"""
Router du panneau d'administration.
Connexion admin, génération / révocation des tokens, listes étudiants et historique.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_current_admin
from app.schemas.admin import AdminLoginRequest, AdminTokenResponse
from app.schemas.login import LoginHistoryResponse
from app.schemas.student import StudentResponse, TokenIssueRequest, TokenIssueResponse
from app.services import admin_auth, login_service, token_service
from app.services.exceptions import InvalidCredentialsError, InvalidInputError, TokenAlreadyActiveError

router = APIRouter(prefix="/api/v1/admin", tags=["Administration"])


@router.post("/login", response_model=AdminTokenResponse, summary="Connexion administrateur")
def admin_login(data: AdminLoginRequest):
    """Échange le mot de passe administrateur contre un jeton bearer."""
    try:
        return admin_auth.authenticate_admin(data.password)
    except InvalidCredentialsError as e:
        raise HTTPException(status_code=401, detail=str(e))


@router.post("/logout", summary="Déconnexion administrateur")
def admin_logout(_admin: dict = Depends(get_current_admin)):
    """
    Le jeton bearer est sans état : le client l'oublie, aucune session n'est stockée côté serveur.
    Conservé pour les clients du panneau d'administration qui appellent /logout.
    """
    return {"success": True}


@router.post("/generate-token", response_model=TokenIssueResponse, status_code=201,
             summary="Générer un token d'accès étudiant")
def generate_token(
    data: TokenIssueRequest,
    db: Session = Depends(get_db),
    _admin: dict = Depends(get_current_admin),
):
    """
    Émet un token pour un nouvel étudiant ou réactive un étudiant révoqué.

    - Email sans '@' → 400
    - Étudiant déjà actif → 409, le token existant est renvoyé dans detail.token
    """
    try:
        return token_service.issue_token(db, data.email)
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except TokenAlreadyActiveError as e:
        raise HTTPException(status_code=409, detail={"message": str(e), "token": e.token})


@router.get("/students", response_model=List[StudentResponse], summary="Lister les étudiants")
def list_students(db: Session = Depends(get_db), _admin: dict = Depends(get_current_admin)):
    """Retourne tous les étudiants, du plus récent au plus ancien."""
    return token_service.list_students(db)


@router.post("/revoke/{student_id}", summary="Révoquer l'accès d'un étudiant")
def revoke_student(
    student_id: int,
    db: Session = Depends(get_db),
    _admin: dict = Depends(get_current_admin),
):
    """Désactive le token de l'étudiant. Idempotent, y compris pour un identifiant inconnu."""
    token_service.revoke_student(db, student_id)
    return {"success": True}


@router.get("/login-history", response_model=List[LoginHistoryResponse],
            summary="Historique des connexions")
def login_history(
    limit: int = Query(default=login_service.MAX_HISTORY_LIMIT, ge=1, le=login_service.MAX_HISTORY_LIMIT),
    db: Session = Depends(get_db),
    _admin: dict = Depends(get_current_admin),
):
    """Retourne les dernières tentatives de connexion (100 maximum), les plus récentes en premier."""
    return login_service.list_login_history(db, limit)
