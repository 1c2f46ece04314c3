from pydantic import BaseModel, Field
from typing import List, Optional

from app.schemas.base import CamelModel, UpdateModel


class JobCreateRequest(CamelModel):
    """Schema for creating a new job"""
    title: str = Field(..., min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[float] = Field(None, ge=0, le=1)
    company_handle: str = Field(..., min_length=1, max_length=25)


class JobUpdateRequest(UpdateModel):
    """Schema for PATCH /jobs/{id}; id and companyHandle are immutable"""
    title: str = Field(None, min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[float] = Field(None, ge=0, le=1)


class JobResponse(CamelModel):
    """Schema for job response"""
    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[float] = None
    company_handle: str


class JobEnvelope(BaseModel):
    job: JobResponse


class JobListResponse(BaseModel):
    jobs: List[JobResponse]


class JobDeletedResponse(BaseModel):
    deleted: int
