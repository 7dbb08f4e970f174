"""
Service d'envoi d'emails SMTP.
Alerte l'administrateur à chaque connexion étudiante réussie.
"""

import logging
import smtplib
from datetime import datetime
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from html import escape
from typing import Optional

from app.config import settings
from app.services.exceptions import NotificationDeliveryError

logger = logging.getLogger(__name__)


def send_login_alert(
    email: str,
    ip: Optional[str],
    login_time: datetime,
    user_agent: Optional[str],
) -> None:
    """
    Envoie un email HTML à ADMIN_EMAIL décrivant la connexion (email, IP, heure, navigateur).
    Ignoré si ADMIN_EMAIL n'est pas configuré.
    Lève NotificationDeliveryError en cas d'échec SMTP ou réseau.
    """
    if not settings.ADMIN_EMAIL:
        logger.debug("ADMIN_EMAIL non configuré : alerte de connexion ignorée pour %s", email)
        return

    msg = MIMEMultipart("alternative")
    msg["From"] = settings.SMTP_FROM
    msg["To"] = settings.ADMIN_EMAIL
    msg["Subject"] = f"Connexion étudiant : {email}"

    html_content = f"""
    <html>
      <body style="font-family: Arial, sans-serif; color: #333; max-width: 600px; margin: auto;">
        <h2 style="color: #1a73e8;">Nouvelle connexion étudiant</h2>
        <p><strong>Email :</strong> {escape(email)}</p>
        <p><strong>Adresse IP :</strong> {escape(ip or "inconnue")}</p>
        <p><strong>Heure (UTC) :</strong> {login_time.strftime('%d/%m/%Y %H:%M:%S')}</p>
        <p><strong>Navigateur :</strong> {escape(user_agent or "inconnu")}</p>
      </body>
    </html>
    """
    msg.attach(MIMEText(html_content, "html", "utf-8"))

    try:
        with smtplib.SMTP(settings.SMTP_HOST, settings.SMTP_PORT, timeout=settings.SMTP_TIMEOUT) as server:
            if settings.SMTP_USE_TLS:
                server.starttls()
            if settings.SMTP_USERNAME:
                server.login(settings.SMTP_USERNAME, settings.SMTP_PASSWORD)
            server.send_message(msg)
    except (smtplib.SMTPException, OSError) as exc:
        raise NotificationDeliveryError(f"Échec d'envoi de l'alerte à {settings.ADMIN_EMAIL} : {exc}") from exc

    logger.info("Alerte de connexion envoyée à %s pour %s", settings.ADMIN_EMAIL, email)
