"""
Tests d'intégration API pour le panneau d'administration.
POST /api/v1/admin/login
POST /api/v1/admin/generate-token
GET  /api/v1/admin/students
POST /api/v1/admin/revoke/{id}
GET  /api/v1/admin/login-history
"""

from datetime import datetime, timedelta
from unittest.mock import MagicMock, patch

from app.models.login_history import LoginHistory
from app.models.student import Student
from app.schemas.student import TokenIssueResponse
from app.services.exceptions import InvalidInputError, StorageError, TokenAlreadyActiveError


# --- Helpers ---

def make_student(**kwargs) -> Student:
    s = MagicMock(spec=Student)
    s.id = kwargs.get("id", 1)
    s.email = kwargs.get("email", "a@x.com")
    s.token = kwargs.get("token", "T")
    s.created_at = kwargs.get("created_at", datetime(2026, 1, 1))
    s.expires_at = kwargs.get("expires_at", datetime(2026, 1, 31))
    s.is_active = kwargs.get("is_active", True)
    s.last_login = kwargs.get("last_login", None)
    s.last_ip = kwargs.get("last_ip", None)
    return s


def make_attempt(**kwargs) -> LoginHistory:
    h = MagicMock(spec=LoginHistory)
    h.id = kwargs.get("id", 1)
    h.student_id = kwargs.get("student_id", None)
    h.email = kwargs.get("email", "a@x.com")
    h.ip = kwargs.get("ip", "1.2.3.4")
    h.user_agent = kwargs.get("user_agent", "UA")
    h.login_time = kwargs.get("login_time", datetime(2026, 1, 1, 10))
    h.success = kwargs.get("success", False)
    return h


# ============================================================
# Authentification
# ============================================================

def test_login_admin_succes(client):
    response = client.post("/api/v1/admin/login", json={"password": "admin-secret"})

    assert response.status_code == 200
    data = response.json()
    assert data["token_type"] == "bearer"
    assert data["access_token"]


def test_login_admin_mauvais_mot_de_passe(client):
    response = client.post("/api/v1/admin/login", json={"password": "faux"})
    assert response.status_code == 401


def test_routes_admin_sans_token(client):
    """Sans en-tête Authorization → 401 sur toutes les routes protégées."""
    assert client.get("/api/v1/admin/students").status_code == 401
    assert client.get("/api/v1/admin/login-history").status_code == 401
    assert client.post("/api/v1/admin/revoke/1").status_code == 401
    assert client.post("/api/v1/admin/logout").status_code == 401
    assert client.post("/api/v1/admin/generate-token", json={"email": "a@x.com"}).status_code == 401


def test_routes_admin_token_invalide(client):
    response = client.get("/api/v1/admin/students", headers={"Authorization": "Bearer pas-un-jwt"})
    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"


def test_routes_admin_avec_token(client):
    """Le jeton obtenu au login ouvre l'accès aux routes protégées."""
    token = client.post("/api/v1/admin/login", json={"password": "admin-secret"}).json()["access_token"]

    with patch("app.routers.admin.token_service.list_students") as mock:
        mock.return_value = []
        response = client.get("/api/v1/admin/students", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200
    assert response.json() == []


def test_logout_admin(admin_client):
    response = admin_client.post("/api/v1/admin/logout")
    assert response.status_code == 200
    assert response.json() == {"success": True}


# ============================================================
# POST /api/v1/admin/generate-token
# ============================================================

def test_generate_token_succes(admin_client):
    expires = datetime(2026, 4, 1, 12, 0)
    with patch("app.routers.admin.token_service.issue_token") as mock:
        mock.return_value = TokenIssueResponse(student_id=5, token="T-NEW", expires_at=expires)
        response = admin_client.post("/api/v1/admin/generate-token", json={"email": "a@x.com"})

    assert response.status_code == 201
    data = response.json()
    assert data["success"] is True
    assert data["token"] == "T-NEW"
    assert data["student_id"] == 5
    assert data["expires_at"].startswith("2026-04-01T12:00")
    assert mock.call_args[0][1] == "a@x.com"


def test_generate_token_email_invalide(admin_client):
    with patch("app.routers.admin.token_service.issue_token") as mock:
        mock.side_effect = InvalidInputError("Une adresse email valide est requise.")
        response = admin_client.post("/api/v1/admin/generate-token", json={"email": "invalide"})

    assert response.status_code == 400


def test_generate_token_deja_actif(admin_client):
    """Étudiant déjà actif → 409 avec le token existant."""
    with patch("app.routers.admin.token_service.issue_token") as mock:
        mock.side_effect = TokenAlreadyActiveError("T-EXISTANT")
        response = admin_client.post("/api/v1/admin/generate-token", json={"email": "a@x.com"})

    assert response.status_code == 409
    assert response.json()["detail"]["token"] == "T-EXISTANT"


def test_generate_token_body_manquant(admin_client):
    response = admin_client.post("/api/v1/admin/generate-token")
    assert response.status_code == 422


def test_generate_token_erreur_stockage(admin_client):
    """StorageError → 503 via le handler global."""
    with patch("app.routers.admin.token_service.issue_token") as mock:
        mock.side_effect = StorageError("Erreur de stockage pendant l'émission du token.")
        response = admin_client.post("/api/v1/admin/generate-token", json={"email": "a@x.com"})

    assert response.status_code == 503


# ============================================================
# GET /api/v1/admin/students
# ============================================================

def test_list_students(admin_client):
    students = [
        make_student(id=2, email="b@x.com", last_login=datetime(2026, 1, 5), last_ip="1.1.1.1"),
        make_student(id=1, email="a@x.com", is_active=False),
    ]
    with patch("app.routers.admin.token_service.list_students") as mock:
        mock.return_value = students
        response = admin_client.get("/api/v1/admin/students")

    assert response.status_code == 200
    data = response.json()
    assert [s["email"] for s in data] == ["b@x.com", "a@x.com"]
    assert data[0]["last_ip"] == "1.1.1.1"
    assert data[1]["is_active"] is False


# ============================================================
# POST /api/v1/admin/revoke/{id}
# ============================================================

def test_revoke_succes(admin_client):
    with patch("app.routers.admin.token_service.revoke_student") as mock:
        response = admin_client.post("/api/v1/admin/revoke/12")

    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert mock.call_args[0][1] == 12


def test_revoke_id_invalide(admin_client):
    response = admin_client.post("/api/v1/admin/revoke/abc")
    assert response.status_code == 422


# ============================================================
# GET /api/v1/admin/login-history
# ============================================================

def test_login_history_defaut(admin_client):
    base = datetime(2026, 1, 1)
    attempts = [make_attempt(id=i, login_time=base - timedelta(minutes=i)) for i in range(3)]
    with patch("app.routers.admin.login_service.list_login_history") as mock:
        mock.return_value = attempts
        response = admin_client.get("/api/v1/admin/login-history")

    assert response.status_code == 200
    assert len(response.json()) == 3
    assert mock.call_args[0][1] == 100


def test_login_history_limite(admin_client):
    with patch("app.routers.admin.login_service.list_login_history") as mock:
        mock.return_value = []
        response = admin_client.get("/api/v1/admin/login-history?limit=20")

    assert response.status_code == 200
    assert mock.call_args[0][1] == 20


def test_login_history_limite_trop_grande(admin_client):
    """Plus de 100 lignes ne peuvent pas être demandées."""
    response = admin_client.get("/api/v1/admin/login-history?limit=500")
    assert response.status_code == 422
