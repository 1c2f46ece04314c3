"""
Pydantic schemas for Company API requests/responses.
"""

from typing import List, Optional
from pydantic import BaseModel, Field

from app.schemas.base import CamelModel, UpdateModel


class CompanyCreateRequest(CamelModel):
    """Schema for creating a new company"""
    handle: str = Field(..., min_length=1, max_length=25)
    name: str = Field(..., min_length=1)
    description: str
    num_employees: Optional[int] = Field(None, ge=0)
    logo_url: Optional[str] = None


class CompanyUpdateRequest(UpdateModel):
    """
    Schema for PATCH /companies/{handle}.

    The handle cannot be changed. name and description may be omitted but
    not set to null.
    """
    name: str = Field(None, min_length=1)
    description: str = None
    num_employees: Optional[int] = Field(None, ge=0)
    logo_url: Optional[str] = None


class CompanyResponse(CamelModel):
    handle: str
    name: str
    description: str
    num_employees: Optional[int] = None
    logo_url: Optional[str] = None


class CompanyJob(CamelModel):
    """Job summary listed under a company"""
    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[float] = None


class CompanyDetail(CompanyResponse):
    jobs: List[CompanyJob] = []


class CompanyEnvelope(BaseModel):
    company: CompanyResponse


class CompanyDetailEnvelope(BaseModel):
    company: CompanyDetail


class CompanyListResponse(BaseModel):
    companies: List[CompanyResponse]
