# /app/schemas/staff.py
from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field

from app.schemas.student import StudentSummary


class StaffCreateRow(BaseModel):
    email: EmailStr
    password: Optional[str] = Field(None, min_length=6)
    name: Optional[str] = None
    department: Optional[str] = None


class BulkStaffCreateRequest(BaseModel):
    staffs: List[StaffCreateRow] = Field(..., min_length=1)


class StaffSummary(BaseModel):
    staff_id: str
    email: str
    name: Optional[str]
    department: Optional[str]

    class Config:
        from_attributes = True


class StaffDetailResponse(BaseModel):
    staff: StaffSummary
    students: List[StudentSummary]
