"""
CRUD operations for Company model.
"""

import logging
from typing import List, Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from app.core.exceptions import BadRequestError, NotFoundError
from app.crud.base import partial_update
from app.models import Company
from app.schemas.company import CompanyCreateRequest

logger = logging.getLogger(__name__)

# API field name -> column name for fields whose names differ
COMPANY_JS_TO_SQL = {
    "numEmployees": "num_employees",
    "logoUrl": "logo_url",
}
UPDATABLE_COLUMNS = {"name", "description", "num_employees", "logo_url"}


def create(db: Session, company_data: CompanyCreateRequest) -> Company:
    """
    Create a new company.

    Raises:
        BadRequestError: if a company with the same handle or name already exists
    """
    if db.get(Company, company_data.handle) is not None:
        raise BadRequestError(f"Duplicate company: {company_data.handle}")

    db_company = Company(
        handle=company_data.handle,
        name=company_data.name,
        description=company_data.description,
        num_employees=company_data.num_employees,
        logo_url=company_data.logo_url,
    )
    db.add(db_company)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise BadRequestError(f"Duplicate company name: {company_data.name}") from e
    db.refresh(db_company)

    logger.info(f"Created company {db_company.handle}")
    return db_company


def find_all(
    db: Session,
    name: Optional[str] = None,
    min_employees: Optional[int] = None,
    max_employees: Optional[int] = None,
) -> List[Company]:
    """
    List companies ordered by name, with optional filters.

    Args:
        db: Database session
        name: Case-insensitive substring of the company name
        min_employees: Only companies with at least this many employees
        max_employees: Only companies with at most this many employees

    Raises:
        BadRequestError: if min_employees > max_employees
    """
    if min_employees is not None and max_employees is not None and min_employees > max_employees:
        raise BadRequestError("minEmployees cannot be greater than maxEmployees")

    query = db.query(Company)

    if min_employees is not None:
        query = query.filter(Company.num_employees >= min_employees)
    if max_employees is not None:
        query = query.filter(Company.num_employees <= max_employees)
    if name:
        query = query.filter(Company.name.ilike(f"%{name}%"))

    return query.order_by(Company.name).all()


def get(db: Session, handle: str) -> Company:
    """
    Retrieve a company (with its jobs) by handle.

    Raises:
        NotFoundError: if no such company
    """
    company = db.get(Company, handle)
    if company is None:
        raise NotFoundError(f"No company: {handle}")
    return company


def update(db: Session, handle: str, data: dict) -> Company:
    """
    Partially update a company with the camelCase fields in ``data``.

    Raises:
        NoUpdateDataError: data is empty
        NotFoundError: if no such company
        BadRequestError: if the new name belongs to another company
    """
    partial_update(
        db,
        Company,
        key_column="handle",
        key=handle,
        data=data,
        js_to_sql=COMPANY_JS_TO_SQL,
        updatable_columns=UPDATABLE_COLUMNS,
        not_found_message=f"No company: {handle}",
        conflict_message=f"Duplicate company name: {data.get('name')}",
    )
    return get(db, handle)


def remove(db: Session, handle: str) -> None:
    """
    Delete a company and its jobs.

    Raises:
        NotFoundError: if no such company
    """
    company = get(db, handle)
    db.delete(company)
    db.commit()
    logger.info(f"Deleted company {handle}")
