"""
Service de vérification des connexions étudiantes et historique d'audit.

Flux de verify_login :
  1. Aucun couple (email, token) actif → audit échec (student_id NULL) → InvalidCredentialsError
  2. Couple trouvé mais expiré → auto-révocation + audit échec → TokenExpiredError
  3. Couple valide → last_login / last_ip mis à jour, audit succès, alerte admin (best effort)
"""

import logging
from datetime import datetime
from typing import Callable, Optional

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from app.config import settings
from app.database import storage_errors
from app.models.login_history import LoginHistory
from app.models.student import Student, utcnow
from app.schemas.login import VerifyResponse
from app.services.email_service import send_login_alert
from app.services.exceptions import InvalidCredentialsError, TokenExpiredError

logger = logging.getLogger(__name__)

MAX_HISTORY_LIMIT = 100

LoginNotifier = Callable[[str, Optional[str], datetime, Optional[str]], None]


def verify_login(
    db: Session,
    email: str,
    token: str,
    ip: Optional[str] = None,
    user_agent: Optional[str] = None,
    notify: Optional[LoginNotifier] = None,
) -> VerifyResponse:
    """
    Vérifie un couple (email, token) et enregistre la tentative dans login_history.

    Chaque appel ajoute exactement une ligne d'historique, quel que soit le résultat.
    L'échec de l'alerte email n'affecte jamais le résultat de la connexion.
    """
    now = utcnow()

    with storage_errors(db, "la vérification de connexion"):
        student = db.execute(
            select(Student).where(
                Student.email == email,
                Student.token == token,
                Student.is_active.is_(True),
            )
        ).scalar()

        if student is None:
            db.add(_attempt(None, email, ip, user_agent, now, success=False))
            db.commit()
            logger.warning("Connexion refusée pour %s depuis %s : identifiants invalides", email, ip)
            raise InvalidCredentialsError("Identifiants invalides ou accès révoqué.")

        if now > student.expires_at:
            # Auto-révocation conditionnelle : sans effet si déjà désactivé entre-temps
            db.execute(
                update(Student)
                .where(Student.id == student.id, Student.is_active.is_(True))
                .values(is_active=False)
            )
            db.add(_attempt(student.id, email, ip, user_agent, now, success=False))
            db.commit()
            logger.warning("Connexion refusée pour %s : token expiré le %s", email, student.expires_at)
            raise TokenExpiredError("Token expiré.")

        student.last_login = now
        student.last_ip = ip
        db.add(_attempt(student.id, email, ip, user_agent, now, success=True))
        db.commit()

    logger.info("Connexion réussie pour %s depuis %s", email, ip)
    _notify_admin(notify or send_login_alert, email, ip, now, user_agent)

    return VerifyResponse(redirect=settings.COURSE_LINK)


def list_login_history(db: Session, limit: int = MAX_HISTORY_LIMIT) -> list[LoginHistory]:
    """Retourne les dernières tentatives de connexion (au plus 100), de la plus récente à la plus ancienne."""
    limit = max(1, min(limit, MAX_HISTORY_LIMIT))
    with storage_errors(db, "la lecture de l'historique"):
        return db.execute(
            select(LoginHistory)
            .order_by(LoginHistory.login_time.desc(), LoginHistory.id.desc())
            .limit(limit)
        ).scalars().all()


def _attempt(
    student_id: Optional[int],
    email: str,
    ip: Optional[str],
    user_agent: Optional[str],
    login_time: datetime,
    success: bool,
) -> LoginHistory:
    return LoginHistory(
        student_id=student_id,
        email=email,
        ip=ip,
        user_agent=user_agent,
        login_time=login_time,
        success=success,
    )


def _notify_admin(
    notify: LoginNotifier,
    email: str,
    ip: Optional[str],
    login_time: datetime,
    user_agent: Optional[str],
) -> None:
    """Envoie l'alerte de connexion ; toute erreur est journalisée puis ignorée."""
    try:
        notify(email, ip, login_time, user_agent)
    except Exception as exc:
        logger.warning("Alerte de connexion non envoyée pour %s : %s", email, exc)
