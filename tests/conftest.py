import pytest
from fastapi import HTTPException
from fastapi.testclient import TestClient
from passlib.hash import bcrypt
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.db.base import Base
from app.db.session import enable_sqlite_foreign_keys
from app.dependencies.db import get_db
from app.main import app
from app.models.staff import Staff
from app.models.student import Student
from app.models.super_admin import SuperAdmin
from app.services.identity_provider import get_identity_provider
from app.services.mailer import get_mailer
from app.services.role_resolver import RolePolicy, get_role_policy
from app.services.session_service import create_session_token
from app.services.storage import BucketStorage, get_storage

DOMAIN = "saec.ac.in"
SUPER_ADMIN_EMAIL = "placement.head@saec.ac.in"
ALLOWED_STAFF_EMAIL = "9999999@saec.ac.in"

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
enable_sqlite_foreign_keys(engine)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class FakeIdentityProvider:
    def __init__(self):
        self.tokens = {}
        self.deleted = []

    def register(self, token: str, uid: str, email: str, name: str | None = None):
        self.tokens[token] = {"uid": uid, "email": email, "name": name}

    def verify_id_token(self, id_token: str) -> dict:
        if id_token not in self.tokens:
            raise HTTPException(status_code=401, detail="Invalid Firebase ID token")
        return self.tokens[id_token]

    def delete_user(self, uid: str) -> None:
        self.deleted.append(uid)


class FakeMailer:
    def __init__(self):
        self.sent = []

    def send_job_notification(self, drive, recipients):
        for recipient in recipients:
            self.sent.append((drive.company_name, recipient))
        return len(recipients)


class FakeS3Client:
    def __init__(self):
        self.uploads = []

    def upload_fileobj(self, fileobj, bucket, key, ExtraArgs=None):
        self.uploads.append({"bucket": bucket, "key": key, "body": fileobj.read(), "extra": ExtraArgs})


@pytest.fixture
def policy():
    return RolePolicy(
        institution_domain=DOMAIN,
        super_admin_emails=frozenset({SUPER_ADMIN_EMAIL}),
        staff_emails=frozenset({ALLOWED_STAFF_EMAIL}),
    )


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def identity_provider():
    return FakeIdentityProvider()


@pytest.fixture
def mailer():
    return FakeMailer()


@pytest.fixture
def s3_client():
    return FakeS3Client()


@pytest.fixture
def storage(s3_client):
    bucket = BucketStorage(bucket="placement-bucket", region="ap-south-1", access_key="key", secret_key="secret")
    bucket._client = s3_client
    return bucket


@pytest.fixture
def client(db, policy, identity_provider, mailer, storage):
    def override_get_db():
        session = TestingSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_role_policy] = lambda: policy
    app.dependency_overrides[get_identity_provider] = lambda: identity_provider
    app.dependency_overrides[get_mailer] = lambda: mailer
    app.dependency_overrides[get_storage] = lambda: storage
    yield TestClient(app)
    app.dependency_overrides.clear()


def add_staff(db, email="hod.cse@saec.ac.in", password="staffpass", **fields) -> Staff:
    staff = Staff(email=email, password=bcrypt.hash(password) if password else None, **fields)
    db.add(staff)
    db.commit()
    db.refresh(staff)
    return staff


def add_student(db, email="2024001@saec.ac.in", password="secret1", staff=None, **fields) -> Student:
    student = Student(
        email=email,
        password=bcrypt.hash(password) if password else None,
        staff_id=staff.staff_id if staff else None,
        **fields,
    )
    db.add(student)
    db.commit()
    db.refresh(student)
    return student


def add_super_admin(db, email=SUPER_ADMIN_EMAIL, password="adminpass") -> SuperAdmin:
    admin = SuperAdmin(email=email, password=bcrypt.hash(password), name="Placement Head")
    db.add(admin)
    db.commit()
    db.refresh(admin)
    return admin


def login_as(client, role: str, account) -> None:
    """ 세션 쿠키를 직접 발급해 클라이언트에 심습니다. """
    if role == "staff":
        token = create_session_token(account.staff_id, "staff", account.email, staff_id=account.staff_id)
        client.cookies.set("staff_session", token)
    elif role == "student":
        token = create_session_token(account.student_id, "student", account.email, student_id=account.student_id)
        client.cookies.set("student_session", token)
    else:
        token = create_session_token(account.id, "super_admin", account.email)
        client.cookies.set("admin_session", token)
