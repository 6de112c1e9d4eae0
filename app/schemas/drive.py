# /app/schemas/drive.py
from datetime import date, datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field, field_validator


class DriveCreate(BaseModel):
    company_name: str = Field(..., min_length=1)
    job_description: Optional[str] = None
    drive_date: Optional[date] = None
    drive_link: Optional[str] = None
    expiration: Optional[datetime] = None
    department: List[str] = []
    batch: Optional[str] = None
    role: Optional[str] = None
    lpa: Optional[float] = None
    notification_emails: List[EmailStr] = []

    @field_validator("expiration")
    @classmethod
    def to_naive_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        # DB 에는 tz 없는 UTC 로 저장
        if value is not None and value.tzinfo is not None:
            return value.astimezone(timezone.utc).replace(tzinfo=None)
        return value


class DriveCreateRequest(BaseModel):
    jobs: List[DriveCreate] = Field(..., min_length=1)


class DriveResponse(BaseModel):
    id: int
    created_at: Optional[datetime]
    company_name: str
    job_description: Optional[str]
    drive_date: Optional[date]
    drive_link: Optional[str]
    expiration: Optional[datetime]
    department: List[str]
    batch: Optional[str]
    role: Optional[str]
    lpa: Optional[float]
    staff_id: Optional[str]

    class Config:
        from_attributes = True


class DriveCreateResponse(BaseModel):
    message: str
    jobs: List[DriveResponse]
    notified: int


class StudentDriveResponse(DriveResponse):
    applied: bool


class ApplicationRequest(BaseModel):
    id: int


class ApplicationStatusResponse(BaseModel):
    applied: bool
