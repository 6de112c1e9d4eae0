import io
from datetime import datetime, timedelta

from PIL import Image

from conftest import add_staff, add_student, login_as
from app.models.application import Application
from app.models.drive import Drive
from app.models.student import Student


def add_drive(db, company="Zoho", departments=None, expires_in_days=7) -> Drive:
    drive = Drive(
        company_name=company,
        job_description="Software engineer",
        department=departments or [],
        expiration=datetime.utcnow() + timedelta(days=expires_in_days),
    )
    db.add(drive)
    db.commit()
    db.refresh(drive)
    return drive


def test_student_login_sets_cookie_and_redirects(client, db):
    add_student(db, email="2024001@saec.ac.in", password="secret1")

    response = client.post(
        "/student/login",
        json={"email": "2024001@saec.ac.in", "password": "secret1"},
        follow_redirects=False,
    )

    assert response.status_code == 302
    assert response.headers["location"] == "/student"
    assert "student_session" in response.cookies

    issued = next(h for h in response.headers.get_list("set-cookie") if h.startswith("student_session=") and "Max-Age=0" not in h)
    attributes = [part.strip().lower() for part in issued.split(";")]
    assert "httponly" in attributes
    assert "samesite=lax" in attributes
    assert "max-age=3600" in attributes
    assert "path=/" in attributes


def test_login_failures_are_indistinguishable(client, db):
    """
    존재하지 않는 이메일과 틀린 비밀번호는 같은 401 응답을 돌려줍니다.
    """
    add_student(db, email="2024001@saec.ac.in", password="secret1")

    wrong_password = client.post("/student/login", json={"email": "2024001@saec.ac.in", "password": "nope"})
    unknown_email = client.post("/student/login", json={"email": "2024999@saec.ac.in", "password": "secret1"})

    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json() == {"error": "Invalid credentials"}


def test_oauth_only_account_cannot_password_login(client, db):
    add_student(db, email="2024003@saec.ac.in", password=None)
    response = client.post("/student/login", json={"email": "2024003@saec.ac.in", "password": "anything"})
    assert response.status_code == 401


def test_login_validation_error(client):
    response = client.post("/student/login", json={"email": "not-an-email"})
    assert response.status_code == 422
    assert response.json()["error"] == "Invalid request"


def test_resume_post_and_patch(client, db):
    student = add_student(db)
    login_as(client, "student", student)

    created = client.post("/student/resume", json={"name": "Asha", "cgpa": 8.4, "department": "CSE", "reg_no": "R1"})
    assert created.status_code == 200
    assert created.json()["cgpa"] == 8.4

    patched = client.patch("/student/resume", json={"github_url": "https://github.com/asha"})
    assert patched.status_code == 200
    body = patched.json()
    assert body["github_url"] == "https://github.com/asha"
    assert body["name"] == "Asha"
    assert body["department"] == "CSE"

    fetched = client.get("/student/resume")
    assert fetched.json()["reg_no"] == "R1"


def test_resume_duplicate_reg_no_is_conflict(client, db):
    add_student(db, email="2024002@saec.ac.in", reg_no="R1")
    student = add_student(db, email="2024001@saec.ac.in")
    login_as(client, "student", student)

    response = client.patch("/student/resume", json={"reg_no": "R1"})
    assert response.status_code == 409


def test_update_password(client, db):
    student = add_student(db, password="secret1")
    login_as(client, "student", student)

    wrong = client.patch("/student/updatepassword", json={"old_password": "bad", "new_password": "newsecret"})
    assert wrong.status_code == 401
    assert wrong.json() == {"error": "Incorrect old password"}

    too_short = client.patch("/student/updatepassword", json={"old_password": "secret1", "new_password": "123"})
    assert too_short.status_code == 422

    ok = client.patch("/student/updatepassword", json={"old_password": "secret1", "new_password": "newsecret"})
    assert ok.status_code == 200
    assert ok.json() == {"message": "Password updated successfully"}

    relogin = client.post(
        "/student/login",
        json={"email": student.email, "password": "newsecret"},
        follow_redirects=False,
    )
    assert relogin.status_code == 302


def test_apply_withdraw_and_status(client, db):
    student = add_student(db, department="CSE")
    drive = add_drive(db, departments=["CSE", "IT"])
    login_as(client, "student", student)

    assert client.get(f"/student/apply/{drive.id}").json() == {"applied": False}

    applied = client.post("/student/apply", json={"id": drive.id})
    assert applied.status_code == 201

    duplicate = client.post("/student/apply", json={"id": drive.id})
    assert duplicate.status_code == 409

    assert client.get(f"/student/apply/{drive.id}").json() == {"applied": True}
    drives = client.get("/student/drives").json()
    assert drives[0]["applied"] is True

    withdrawn = client.request("DELETE", "/student/apply", json={"id": drive.id})
    assert withdrawn.status_code == 200
    assert client.get(f"/student/apply/{drive.id}").json() == {"applied": False}

    again = client.request("DELETE", "/student/apply", json={"id": drive.id})
    assert again.status_code == 404


def test_apply_rules(client, db):
    student = add_student(db, department="MECH")
    login_as(client, "student", student)

    other_department = add_drive(db, company="Infosys", departments=["CSE"])
    expired = add_drive(db, company="TCS", expires_in_days=-1)

    assert client.post("/student/apply", json={"id": other_department.id}).status_code == 403
    assert client.post("/student/apply", json={"id": expired.id}).status_code == 403
    assert client.post("/student/apply", json={"id": 9999}).status_code == 404
    assert db.query(Application).count() == 0


def test_profile_image_upload(client, db, s3_client):
    student = add_student(db)
    login_as(client, "student", student)

    buffer = io.BytesIO()
    Image.new("RGB", (8, 8), color="red").save(buffer, format="PNG")
    response = client.post(
        "/student/profile/image",
        files={"file": ("avatar.png", buffer.getvalue(), "image/png")},
    )

    assert response.status_code == 200
    url = response.json()["url"]
    assert url.startswith("https://placement-bucket.s3.ap-south-1.amazonaws.com/profile_image/")
    assert url.endswith("_avatar.webp")
    assert s3_client.uploads[0]["extra"] == {"ContentType": "image/webp"}

    db.expire_all()
    assert db.query(Student).filter(Student.student_id == student.student_id).one().profile_image_url == url


def test_profile_image_rejects_non_image(client, db):
    login_as(client, "student", add_student(db))
    response = client.post("/student/profile/image", files={"file": ("notes.txt", b"hello", "text/plain")})
    assert response.status_code == 422


def test_student_summary(client, db):
    staff = add_staff(db)
    student = add_student(db, staff=staff, name="Asha")
    login_as(client, "student", student)

    response = client.get("/student")
    assert response.status_code == 200
    assert response.json()["staff_id"] == staff.staff_id
    assert response.json()["placed_status"] == "no"
