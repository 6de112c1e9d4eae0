# /app/schemas/student.py
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field


class StudentCreateRow(BaseModel):
    email: EmailStr
    password: Optional[str] = Field(None, min_length=6)
    name: Optional[str] = None
    reg_no: Optional[str] = None
    roll_no: Optional[str] = None
    department: Optional[str] = None
    batch: Optional[str] = None
    phone_number: Optional[str] = None


class BulkStudentCreateRequest(BaseModel):
    students: List[StudentCreateRow] = Field(..., min_length=1)


class AdminStudentUploadRow(StudentCreateRow):
    staff_email: EmailStr


class AdminStudentUploadRequest(BaseModel):
    students: List[AdminStudentUploadRow] = Field(..., min_length=1)


class ResumeFields(BaseModel):
    name: Optional[str] = None
    phone_number: Optional[str] = None
    skill_set: Optional[str] = None
    languages_known: Optional[str] = None
    tenth_mark: Optional[float] = Field(None, ge=0, le=100)
    twelfth_mark: Optional[float] = Field(None, ge=0, le=100)
    cgpa: Optional[float] = Field(None, ge=0, le=10)
    batch: Optional[str] = None
    linkedin_url: Optional[str] = None
    github_url: Optional[str] = None
    reg_no: Optional[str] = None
    roll_no: Optional[str] = None
    department: Optional[str] = None
    no_of_arrears: Optional[int] = Field(None, ge=0)


class StudentResumeResponse(ResumeFields):
    student_id: str
    email: str
    placed_status: str
    company_placed_in: Optional[str]
    profile_image_url: Optional[str]

    class Config:
        from_attributes = True


class StudentSummary(BaseModel):
    student_id: str
    email: str
    name: Optional[str]
    department: Optional[str]
    batch: Optional[str]
    reg_no: Optional[str]
    placed_status: str
    staff_id: Optional[str]

    class Config:
        from_attributes = True


class ProfileImageResponse(BaseModel):
    message: str
    url: str


class RegisteredStudentResponse(BaseModel):
    application_id: int
    applied_at: Optional[datetime]
    student_id: str
    student_name: Optional[str]
    student_email: str
    department: Optional[str]
    drive_id: int
    company_name: str
