# /app/schemas/superadmin.py
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field

from app.schemas.drive import DriveResponse
from app.schemas.staff import StaffSummary
from app.schemas.student import StudentSummary


class SuperAdminOverviewResponse(BaseModel):
    email: str
    staffs: List[StaffSummary]
    students: List[StudentSummary]


class GroupMailRequest(BaseModel):
    emails: List[EmailStr] = Field(..., min_length=1)


class GroupMailResponse(BaseModel):
    emails: List[str]


class EventCreate(BaseModel):
    event_name: str = Field(..., min_length=1)
    event_link: Optional[str] = None
    date: Optional[str] = None
    poster: Optional[str] = Field(None, description="base64 인코딩된 포스터 이미지 (data URL 허용)")
    poster_name: Optional[str] = None


class EventResponse(BaseModel):
    id: int
    event_name: str
    event_link: Optional[str]
    date: Optional[str]
    url: Optional[str]

    class Config:
        from_attributes = True


class PlacedStudentsRequest(BaseModel):
    emails: List[EmailStr] = Field(..., min_length=1)
    company_name: str = Field(..., min_length=1)


class PlacedStudentsResponse(BaseModel):
    updated: List[str]
    errors: List[dict]


class PlacedStudentResponse(BaseModel):
    name: Optional[str]
    department: Optional[str]
    batch: Optional[str]
    company_placed_in: Optional[str]
    url: Optional[str]


class CoordinatorCreate(BaseModel):
    name: str = Field(..., min_length=1)
    dept: Optional[str] = None
    phone_number: Optional[str] = None


class CoordinatorCreateRequest(BaseModel):
    coordinators: List[CoordinatorCreate] = Field(..., min_length=1)


class CoordinatorResponse(BaseModel):
    id: int
    name: str
    dept: Optional[str]
    phone_number: Optional[str]

    class Config:
        from_attributes = True


class ApplicantInfo(BaseModel):
    student_id: str
    name: Optional[str]
    email: str
    department: Optional[str]
    applied_at: Optional[datetime]


class DriveWithApplicants(DriveResponse):
    applicants: List[ApplicantInfo]
