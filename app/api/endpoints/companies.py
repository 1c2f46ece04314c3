import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import require_admin
from app.crud import company as company_crud
from app.schemas.base import DeletedResponse
from app.schemas.company import (
    CompanyCreateRequest,
    CompanyDetail,
    CompanyDetailEnvelope,
    CompanyEnvelope,
    CompanyListResponse,
    CompanyResponse,
    CompanyUpdateRequest,
)

router = APIRouter(prefix="/companies", tags=["Companies"])
logger = logging.getLogger(__name__)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=CompanyEnvelope,
    dependencies=[Depends(require_admin)],
)
def create_company(
    request: CompanyCreateRequest,
    db: Session = Depends(get_db)
):
    """
    Create a company.

    Authorization required: admin
    """
    company = company_crud.create(db, request)
    return CompanyEnvelope(company=CompanyResponse.model_validate(company))


@router.get("", response_model=CompanyListResponse)
def list_companies(
    name: Optional[str] = Query(None, description="Case-insensitive partial match on name"),
    min_employees: Optional[int] = Query(None, alias="minEmployees", ge=0),
    max_employees: Optional[int] = Query(None, alias="maxEmployees", ge=0),
    db: Session = Depends(get_db)
):
    """
    List companies, optionally filtered.

    Authorization required: none
    """
    companies = company_crud.find_all(
        db,
        name=name,
        min_employees=min_employees,
        max_employees=max_employees,
    )
    return CompanyListResponse(companies=[CompanyResponse.model_validate(c) for c in companies])


@router.get("/{handle}", response_model=CompanyDetailEnvelope)
def get_company(handle: str, db: Session = Depends(get_db)):
    """
    Retrieve a company with the jobs it has posted.

    Authorization required: none
    """
    company = company_crud.get(db, handle)
    return CompanyDetailEnvelope(company=CompanyDetail.model_validate(company))


@router.patch(
    "/{handle}",
    response_model=CompanyEnvelope,
    dependencies=[Depends(require_admin)],
)
def update_company(
    handle: str,
    request: CompanyUpdateRequest,
    db: Session = Depends(get_db)
):
    """
    Update some of a company's fields: name, description, numEmployees, logoUrl.

    Authorization required: admin
    """
    company = company_crud.update(db, handle, request.to_update_data())
    return CompanyEnvelope(company=CompanyResponse.model_validate(company))


@router.delete(
    "/{handle}",
    response_model=DeletedResponse,
    dependencies=[Depends(require_admin)],
)
def delete_company(handle: str, db: Session = Depends(get_db)):
    """
    Delete a company and its jobs.

    Authorization required: admin
    """
    company_crud.remove(db, handle)
    return DeletedResponse(deleted=handle)
