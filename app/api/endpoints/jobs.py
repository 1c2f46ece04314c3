import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import require_admin
from app.crud import job as job_crud
from app.schemas.job import (
    JobCreateRequest,
    JobDeletedResponse,
    JobEnvelope,
    JobListResponse,
    JobResponse,
    JobUpdateRequest,
)

router = APIRouter(prefix="/jobs", tags=["Jobs"])
logger = logging.getLogger(__name__)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=JobEnvelope,
    dependencies=[Depends(require_admin)],
)
def create_job(
    request: JobCreateRequest,
    db: Session = Depends(get_db)
):
    """
    Create a new job posting for an existing company.

    Authorization required: admin
    """
    job = job_crud.create(db, request)
    return JobEnvelope(job=JobResponse.model_validate(job))


@router.get("", response_model=JobListResponse)
def list_jobs(
    title: Optional[str] = Query(None, description="Case-insensitive partial match on title"),
    min_salary: Optional[int] = Query(None, alias="minSalary", ge=0),
    has_equity: Optional[bool] = Query(None, alias="hasEquity"),
    db: Session = Depends(get_db)
):
    """
    List jobs, optionally filtered.

    Args:
        title: Partial, case-insensitive title match
        minSalary: Minimum salary
        hasEquity: If true, only jobs with non-zero equity

    Authorization required: none
    """
    jobs = job_crud.get_multi(db, title=title, min_salary=min_salary, has_equity=has_equity)
    return JobListResponse(jobs=[JobResponse.model_validate(j) for j in jobs])


@router.get("/{job_id}", response_model=JobEnvelope)
def get_job(job_id: int, db: Session = Depends(get_db)):
    """
    Retrieve a job by ID.

    Authorization required: none
    """
    job = job_crud.get_by_id(db, job_id)
    return JobEnvelope(job=JobResponse.model_validate(job))


@router.patch(
    "/{job_id}",
    response_model=JobEnvelope,
    dependencies=[Depends(require_admin)],
)
def update_job(
    job_id: int,
    request: JobUpdateRequest,
    db: Session = Depends(get_db)
):
    """
    Update a job's title, salary and/or equity.

    Authorization required: admin
    """
    job = job_crud.update(db, job_id, request.to_update_data())
    return JobEnvelope(job=JobResponse.model_validate(job))


@router.delete(
    "/{job_id}",
    response_model=JobDeletedResponse,
    dependencies=[Depends(require_admin)],
)
def delete_job(job_id: int, db: Session = Depends(get_db)):
    """
    Delete a job by ID.

    Authorization required: admin
    """
    job_crud.delete(db, job_id)
    return JobDeletedResponse(deleted=job_id)
