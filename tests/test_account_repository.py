import pytest
from fastapi import HTTPException

from conftest import TestingSessionLocal, add_staff
from app.models.student import Student
from app.services.account_repository import student_repository


def test_duplicate_reg_no_in_batch_is_skipped_not_fatal(db):
    """
    같은 요청 안에서 reg_no 가 겹치면 뒤의 행만 skipped 되고 나머지는 등록됩니다.
    """
    staff = add_staff(db)
    rows = [
        {"email": "2024001@saec.ac.in", "reg_no": "R1"},
        {"email": "2024002@saec.ac.in", "reg_no": "R1"},
        {"email": "2024003@saec.ac.in"},
    ]

    result = student_repository.bulk_create(db, rows, lambda email: True, staff_id=staff.staff_id)

    assert result == {
        "inserted": ["2024001@saec.ac.in", "2024003@saec.ac.in"],
        "skipped": ["2024002@saec.ac.in"],
        "rejected": [],
    }
    assert db.query(Student).count() == 2


def test_roll_no_already_in_table_is_skipped(db):
    db.add(Student(email="2023001@saec.ac.in", roll_no="CSE-01"))
    db.commit()

    result = student_repository.bulk_create(
        db,
        [{"email": "2024001@saec.ac.in", "roll_no": "CSE-01"}, {"email": "2024002@saec.ac.in", "roll_no": "CSE-02"}],
        lambda email: True,
    )

    assert result["inserted"] == ["2024002@saec.ac.in"]
    assert result["skipped"] == ["2024001@saec.ac.in"]


def test_concurrent_insert_between_check_and_commit_is_conflict(db):
    """
    사전 중복 검사 이후 다른 요청이 같은 이메일을 먼저 커밋하면 409 이고 배치 전체가 롤백됩니다.
    """
    racing = {"done": False}

    def email_rule(email):
        if not racing["done"]:
            other = TestingSessionLocal()
            try:
                other.add(Student(email="2024002@saec.ac.in"))
                other.commit()
            finally:
                other.close()
            racing["done"] = True
        return True

    rows = [{"email": "2024001@saec.ac.in"}, {"email": "2024002@saec.ac.in"}]
    with pytest.raises(HTTPException) as exc:
        student_repository.bulk_create(db, rows, email_rule)

    assert exc.value.status_code == 409
    assert [email for (email,) in db.query(Student.email).all()] == ["2024002@saec.ac.in"]
