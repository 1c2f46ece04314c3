"""
CRUD operations for Job model.

Implements the Repository pattern to encapsulate all database operations
for jobs, providing a clean interface for the API layer.
"""

import logging
from typing import List, Optional
from sqlalchemy.orm import Session
from app.core.exceptions import BadRequestError, NotFoundError
from app.crud.base import partial_update
from app.models import Company, Job
from app.schemas.job import JobCreateRequest

logger = logging.getLogger(__name__)

# companyHandle is deliberately absent from UPDATABLE_COLUMNS: jobs cannot move
JOB_JS_TO_SQL = {
    "companyHandle": "company_handle",
}
UPDATABLE_COLUMNS = {"title", "salary", "equity"}


def create(db: Session, job_data: JobCreateRequest) -> Job:
    """
    Create a new job in the database.

    Args:
        db: Database session
        job_data: Validated job creation data

    Returns:
        Created Job instance with id

    Raises:
        BadRequestError: if the company does not exist
    """
    if db.get(Company, job_data.company_handle) is None:
        raise BadRequestError(f"No company: {job_data.company_handle}")

    db_job = Job(
        title=job_data.title,
        salary=job_data.salary,
        equity=job_data.equity,
        company_handle=job_data.company_handle,
    )

    db.add(db_job)
    db.commit()
    db.refresh(db_job)

    logger.info(f"Created job {db_job.id}: {db_job.title} at {db_job.company_handle}")
    return db_job


def get_by_id(db: Session, job_id: int) -> Job:
    """
    Retrieve a job by its ID.

    Raises:
        NotFoundError: if no such job
    """
    job = db.get(Job, job_id)
    if job is None:
        raise NotFoundError(f"No job: {job_id}")
    return job


def get_multi(
    db: Session,
    title: Optional[str] = None,
    min_salary: Optional[int] = None,
    has_equity: Optional[bool] = None,
) -> List[Job]:
    """
    Retrieve jobs ordered by title, with optional filtering.

    Args:
        db: Database session
        title: Case-insensitive substring of the job title
        min_salary: Only jobs paying at least this much
        has_equity: When True, only jobs offering non-zero equity

    Returns:
        List of Job instances
    """
    query = db.query(Job)

    if title:
        query = query.filter(Job.title.ilike(f"%{title}%"))
    if min_salary is not None:
        query = query.filter(Job.salary >= min_salary)
    if has_equity:
        query = query.filter(Job.equity > 0)

    return query.order_by(Job.title, Job.id).all()


def update(db: Session, job_id: int, data: dict) -> Job:
    """
    Partially update a job's title, salary and/or equity.

    Raises:
        NoUpdateDataError: data is empty
        NotFoundError: if no such job
    """
    partial_update(
        db,
        Job,
        key_column="id",
        key=job_id,
        data=data,
        js_to_sql=JOB_JS_TO_SQL,
        updatable_columns=UPDATABLE_COLUMNS,
        not_found_message=f"No job: {job_id}",
    )
    return get_by_id(db, job_id)


def delete(db: Session, job_id: int) -> None:
    """
    Delete a job by ID.

    Raises:
        NotFoundError: if no such job
    """
    job = get_by_id(db, job_id)
    db.delete(job)
    db.commit()
    logger.info(f"Deleted job {job_id}")
