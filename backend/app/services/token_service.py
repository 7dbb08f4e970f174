"""
Service métier des tokens d'accès étudiants.

Cycle de vie : émission → (vérification, voir login_service) → expiration → révocation.
Une seule ligne par email ; une réémission sur un étudiant inactif remplace
le token et la date d'expiration et réactive l'étudiant.
"""

import logging
import uuid
from datetime import timedelta
from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.config import settings
from app.database import storage_errors
from app.models.student import Student, utcnow
from app.schemas.student import TokenIssueResponse
from app.services.exceptions import InvalidInputError, StorageError, TokenAlreadyActiveError

logger = logging.getLogger(__name__)


def _generate_token() -> str:
    """Génère un token opaque unique (UUID4, 128 bits aléatoires)."""
    return str(uuid.uuid4())


def issue_token(db: Session, email: str, expiry_days: Optional[int] = None) -> TokenIssueResponse:
    """
    Émet un token pour l'email donné, ou réactive l'étudiant s'il a été révoqué.

    Règles :
    1. L'email doit contenir '@' (InvalidInputError sinon)
    2. Étudiant actif existant → TokenAlreadyActiveError avec le token en cours
    3. Sinon nouveau token, expiration = maintenant + expiry_days (TOKEN_EXPIRY_DAYS par défaut)

    Une insertion concurrente sur le même email est détectée par la contrainte
    d'unicité : la ligne est relue et signalée comme déjà active si c'est le cas.
    """
    if not isinstance(email, str) or "@" not in email:
        raise InvalidInputError("Une adresse email valide est requise.")

    days = settings.TOKEN_EXPIRY_DAYS if expiry_days is None else expiry_days

    with storage_errors(db, "l'émission du token"):
        existing = db.execute(select(Student).where(Student.email == email)).scalar()

        if existing is not None and existing.is_active:
            raise TokenAlreadyActiveError(existing.token)

        token = _generate_token()
        expires_at = utcnow() + timedelta(days=days)

        if existing is not None:
            # Réactivation : created_at est conservé
            existing.token = token
            existing.expires_at = expires_at
            existing.is_active = True
            student = existing
        else:
            student = Student(email=email, token=token, expires_at=expires_at, is_active=True)
            db.add(student)

        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            concurrent = db.execute(select(Student).where(Student.email == email)).scalar()
            if concurrent is not None and concurrent.is_active:
                raise TokenAlreadyActiveError(concurrent.token)
            logger.error("Conflit d'unicité non résolu lors de l'émission du token pour %s", email)
            raise StorageError("Conflit d'unicité lors de l'émission du token.")

        db.refresh(student)

    logger.info(
        "Token %s pour %s (étudiant %s), expire le %s",
        "réactivé" if existing is not None else "émis",
        email, student.id, expires_at.isoformat(),
    )
    return TokenIssueResponse(student_id=student.id, token=token, expires_at=expires_at)


def revoke_student(db: Session, student_id: int) -> None:
    """
    Désactive l'accès d'un étudiant. Idempotent : un étudiant déjà inactif
    ou un identifiant inexistant ne provoque aucune erreur.
    """
    with storage_errors(db, "la révocation"):
        db.execute(
            update(Student)
            .where(Student.id == student_id)
            .values(is_active=False)
        )
        db.commit()

    logger.info("Accès révoqué pour l'étudiant %s", student_id)


def list_students(db: Session) -> list[Student]:
    """Retourne tous les étudiants, du plus récent au plus ancien."""
    with storage_errors(db, "la lecture des étudiants"):
        return db.execute(
            select(Student).order_by(Student.created_at.desc(), Student.id.desc())
        ).scalars().all()
