# /app/services/account_repository.py
import logging
from typing import Callable

from fastapi import HTTPException, status
from passlib.hash import bcrypt
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models.staff import Staff
from app.models.student import Student
from app.models.super_admin import SuperAdmin

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


class AccountRepository:
    """
    staff / student / super_admin 계정 테이블에 공통으로 쓰이는 조회, 인증, 일괄 생성, 삭제 로직.
    scope 키워드 인자는 컬럼 필터로 적용되어 호출자 소유의 행만 다루도록 제한합니다.
    """

    def __init__(self, model, id_attr: str, label: str, unique_fields: tuple[str, ...] = ()):
        self.model = model
        self.id_attr = id_attr
        self.label = label
        # email 외의 unique 컬럼 (예: 학생의 reg_no, roll_no)
        self.unique_fields = unique_fields

    @property
    def id_column(self):
        return getattr(self.model, self.id_attr)

    def _scoped_query(self, db: Session, **scope):
        query = db.query(self.model)
        for column, value in scope.items():
            query = query.filter(getattr(self.model, column) == value)
        return query

    def get_by_email(self, db: Session, email: str):
        return db.query(self.model).filter(self.model.email == email.strip().lower()).first()

    def get_by_id(self, db: Session, account_id: str, **scope):
        return self._scoped_query(db, **scope).filter(self.id_column == account_id).first()

    def get_or_404(self, db: Session, account_id: str, **scope):
        account = self.get_by_id(db, account_id, **scope)
        if not account:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{self.label} not found")
        return account

    def authenticate(self, db: Session, email: str, password: str):
        # 계정 없음, 비밀번호 미설정, 불일치 모두 같은 응답
        account = self.get_by_email(db, email)
        if not account or not account.password or not bcrypt.verify(password, account.password):
            logger.info(f"{self.label} login failed")
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=INVALID_CREDENTIALS)
        return account

    def change_password(self, db: Session, account_id: str, old_password: str, new_password: str) -> None:
        account = self.get_or_404(db, account_id)
        if not account.password or not bcrypt.verify(old_password, account.password):
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Incorrect old password")
        account.password = bcrypt.hash(new_password)
        db.commit()

    def bulk_create(
        self,
        db: Session,
        rows: list[dict],
        email_rule: Callable[[str], bool],
        **extra,
    ) -> dict:
        """
        여러 계정을 한 번에 생성합니다. 부분 성공을 허용합니다.
        - email_rule 을 통과하지 못한 행: rejected
        - 이미 존재하거나 같은 요청 안에서 중복된 이메일 또는 unique 필드 값: skipped
        - 나머지: 비밀번호를 bcrypt 해시 후 inserted
        """
        inserted, skipped, rejected = [], [], []

        emails = [row["email"].strip().lower() for row in rows]
        existing = set()
        if emails:
            existing = {
                email for (email,) in db.query(self.model.email).filter(self.model.email.in_(emails)).all()
            }

        taken = {}
        for field in self.unique_fields:
            candidates = {row[field] for row in rows if row.get(field)}
            column = getattr(self.model, field)
            taken[field] = set()
            if candidates:
                taken[field] = {value for (value,) in db.query(column).filter(column.in_(candidates)).all()}

        for row, email in zip(rows, emails):
            if not email_rule(email):
                rejected.append(email)
                continue
            if email in existing:
                skipped.append(email)
                continue
            if any(row.get(field) and row[field] in taken[field] for field in self.unique_fields):
                skipped.append(email)
                continue
            values = {**row, **extra, "email": email}
            if values.get("password"):
                values["password"] = bcrypt.hash(values["password"])
            db.add(self.model(**values))
            existing.add(email)
            for field in self.unique_fields:
                if row.get(field):
                    taken[field].add(row[field])
            inserted.append(email)

        try:
            db.commit()
        except IntegrityError:
            # 사전 검사 이후 동시 요청이 같은 값을 먼저 커밋한 경우
            db.rollback()
            logger.warning(f"{self.label} bulk create hit a uniqueness conflict")
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=f"{self.label} already exists")

        logger.info(
            f"{self.label} bulk create: inserted={len(inserted)} skipped={len(skipped)} rejected={len(rejected)}"
        )
        return {"inserted": inserted, "skipped": skipped, "rejected": rejected}

    def delete(self, db: Session, account_id: str, **scope) -> None:
        account = self.get_or_404(db, account_id, **scope)
        db.delete(account)
        db.commit()


super_admin_repository = AccountRepository(SuperAdmin, "id", "Super admin")
staff_repository = AccountRepository(Staff, "staff_id", "Staff")
student_repository = AccountRepository(Student, "student_id", "Student", unique_fields=("reg_no", "roll_no"))
