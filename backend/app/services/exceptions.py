"""
Exceptions métier du cycle de vie des tokens d'accès.

Les routers traduisent ces exceptions en réponses HTTP ; StorageError est
interceptée globalement dans app.main. NotificationDeliveryError ne remonte
jamais au-delà de login_service.
"""


class AccessError(Exception):
    """Base de toutes les erreurs métier de l'application."""


class InvalidInputError(AccessError, ValueError):
    """Donnée d'entrée mal formée (ex. email sans '@')."""


class TokenAlreadyActiveError(AccessError):
    """L'étudiant possède déjà un token actif ; le token existant est joint."""

    def __init__(self, token: str):
        self.token = token
        super().__init__("Cet étudiant possède déjà un token actif.")


class InvalidCredentialsError(AccessError):
    """Aucun couple (email, token) actif ne correspond."""


class TokenExpiredError(AccessError):
    """Le token correspond mais sa date d'expiration est dépassée."""


class StorageError(AccessError):
    """Échec de la base de données ; fatal pour la requête en cours, jamais rejoué."""


class NotificationDeliveryError(AccessError):
    """Échec d'envoi de l'alerte email à l'administrateur."""
