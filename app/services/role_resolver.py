# /app/services/role_resolver.py
import re
import logging
from dataclasses import dataclass, field
from typing import Optional

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from app.core.config import settings
from app.models.profile import Profile
from app.models.staff import Staff
from app.models.student import Student
from app.models.super_admin import SuperAdmin

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RolePolicy:
    institution_domain: str
    super_admin_emails: frozenset = field(default_factory=frozenset)
    staff_emails: frozenset = field(default_factory=frozenset)

    @property
    def student_pattern(self) -> re.Pattern:
        return re.compile(rf"^\d{{7}}@{re.escape(self.institution_domain)}$", re.IGNORECASE)

    def is_student_email(self, email: str) -> bool:
        return bool(self.student_pattern.match(email.strip()))

    def is_institution_email(self, email: str) -> bool:
        return email.strip().lower().endswith("@" + self.institution_domain.lower())


def get_role_policy() -> RolePolicy:
    """ 설정(.env)의 허용 목록으로 RolePolicy 를 만듭니다. 테스트에서는 override 합니다. """
    return RolePolicy(
        institution_domain=settings.INSTITUTION_DOMAIN,
        super_admin_emails=frozenset(settings.SUPER_ADMIN_EMAILS),
        staff_emails=frozenset(settings.STAFF_EMAILS),
    )


def resolve_role(email: str, policy: RolePolicy) -> Optional[str]:
    """
    이메일로 역할을 분류합니다. 첫 번째로 일치하는 규칙이 우선합니다.
    기관 도메인이 아니면 None 을 반환합니다.
    """
    normalized = email.strip().lower()
    if normalized in policy.super_admin_emails:
        return "super_admin"
    if normalized in policy.staff_emails:
        return "staff"
    if policy.is_student_email(normalized):
        return "student"
    if policy.is_institution_email(normalized):
        return "staff"
    return None


_ACCOUNT_MODELS = {
    "super_admin": (SuperAdmin, "id"),
    "staff": (Staff, "staff_id"),
    "student": (Student, "student_id"),
}


def handle_oauth_login(
    db: Session,
    identity: dict,
    policy: RolePolicy,
    provider,
    intended_role: Optional[str] = None,
) -> dict:
    """
    검증된 Firebase 사용자 정보로 역할을 결정하고 Profile 과 역할 계정을 upsert 합니다.
    """
    uid = identity["uid"]
    email = (identity.get("email") or "").strip().lower()
    full_name = identity.get("name")

    role = resolve_role(email, policy) if email else None
    if role is None:
        logger.info(f"OAuth login rejected for non-institution account uid={uid}")
        provider.delete_user(uid)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized: You're not a part of the institution",
        )

    if intended_role and intended_role != role:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Unauthorized: Expected {intended_role} role, but user is {role}",
        )

    model, id_attr = _ACCOUNT_MODELS[role]
    account = db.query(model).filter(model.email == email).first()
    if intended_role in ("student", "staff") and account is None:
        label = "Student" if intended_role == "student" else "Staff"
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"{label} email not registered in the system",
        )

    profile = db.query(Profile).filter(Profile.id == uid).first()
    if profile is None:
        # 같은 이메일로 다른 uid 가 남아 있으면 정리 후 새로 연결
        db.query(Profile).filter(Profile.email == email).delete(synchronize_session=False)
        profile = Profile(id=uid, user_role=role, email=email)
        db.add(profile)
    else:
        profile.user_role = role
        profile.email = email
    db.flush()

    if account is None:
        account = model(email=email, name=full_name, user_id=uid)
        db.add(account)
    else:
        account.user_id = uid
        if not account.name and full_name:
            account.name = full_name

    db.commit()
    db.refresh(account)

    account_id = getattr(account, id_attr)
    return {
        "uid": uid,
        "role": role,
        "email": email,
        "full_name": account.name or full_name,
        "staff_id": account_id if role == "staff" else None,
        "student_id": account_id if role == "student" else None,
    }
