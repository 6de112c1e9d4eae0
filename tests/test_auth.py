from urllib.parse import parse_qs, urlparse

from conftest import SUPER_ADMIN_EMAIL, add_staff, add_student
from app.core.config import settings
from app.models.profile import Profile


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def test_oauth_start_redirects_with_intended_role(client):
    response = client.get("/auth/oauth/student", params={"returnUrl": "/jobs"}, follow_redirects=False)
    assert response.status_code == 302
    location = urlparse(response.headers["location"])
    assert location.geturl().startswith(settings.OAUTH_SIGNIN_URL)
    assert parse_qs(location.query) == {"intendedRole": ["student"], "returnUrl": ["/jobs"]}


def test_oauth_success_for_registered_student(client, db, identity_provider):
    """
    사전 등록된 학생은 OAuth 로그인 시 student_session 을 발급받습니다.
    """
    student = add_student(db)
    identity_provider.register("tok-student", uid="uid-student", email=student.email, name="Asha")

    response = client.get(
        "/auth/users/oauth/success",
        params={"intendedRole": "student"},
        headers=bearer("tok-student"),
    )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["role"] == "student"
    assert body["userId"] == student.student_id
    assert body["message"] == "OAuth login successful"
    assert body["redirect"] == "/dashboard/student"
    assert "student_session" in response.cookies

    db.expire_all()
    assert db.query(Profile).filter(Profile.id == "uid-student").one().user_role == "student"


def test_oauth_success_super_admin_uses_oauth_cookie(client, identity_provider):
    identity_provider.register("tok-admin", uid="uid-admin", email=SUPER_ADMIN_EMAIL)

    response = client.get("/auth/users/oauth/success", headers=bearer("tok-admin"))

    assert response.status_code == 200
    assert response.json()["role"] == "super_admin"
    assert "oauth_session" in response.cookies
    assert "admin_session" not in response.cookies


def test_oauth_unregistered_staff_is_rejected_with_redirect(client, identity_provider):
    identity_provider.register("tok-new", uid="uid-new", email="new.faculty@saec.ac.in")

    response = client.get(
        "/auth/users/oauth/success",
        params={"intendedRole": "staff", "returnUrl": "/staff-login"},
        headers=bearer("tok-new"),
    )

    assert response.status_code == 401
    assert response.json() == {"error": "Staff email not registered in the system", "redirect": "/staff-login"}


def test_oauth_outsider_is_deleted(client, identity_provider):
    identity_provider.register("tok-out", uid="uid-out", email="someone@gmail.com")

    response = client.get("/auth/users/oauth/success", headers=bearer("tok-out"))

    assert response.status_code == 401
    assert identity_provider.deleted == ["uid-out"]


def test_oauth_role_mismatch(client, db, identity_provider):
    add_staff(db, email="hod.ece@saec.ac.in")
    identity_provider.register("tok-staff", uid="uid-staff", email="hod.ece@saec.ac.in")

    response = client.get(
        "/auth/users/oauth/success",
        params={"intendedRole": "student"},
        headers=bearer("tok-staff"),
    )

    assert response.status_code == 401
    assert response.json()["error"] == "Unauthorized: Expected student role, but user is staff"


def test_oauth_invalid_firebase_token(client):
    response = client.get("/auth/users/oauth/success", headers=bearer("unknown"))
    assert response.status_code == 401
