"""
Shared helpers for CRUD modules.
"""

import logging
from typing import Any, Mapping

from sqlalchemy import bindparam, text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import BadRequestError, NotFoundError
from app.core.sql import PartialUpdate, sql_for_partial_update

logger = logging.getLogger(__name__)


def partial_update(
    db: Session,
    model: Any,
    key_column: str,
    key: Any,
    data: Mapping[str, Any],
    js_to_sql: Mapping[str, str],
    updatable_columns: set,
    not_found_message: str,
    conflict_message: str = "Duplicate value",
) -> None:
    """
    Run ``UPDATE <table> SET <only the given fields> WHERE key_column = key``.

    Fields are restricted to ``updatable_columns``. The caller is expected
    to have passed the authorization gates already; a missing row surfaces
    here as NotFoundError.

    Raises:
        NoUpdateDataError: data is empty
        BadRequestError: data names a field outside updatable_columns
        NotFoundError: no row matched key
        BadRequestError: the new values violate a unique constraint
            (reported with conflict_message)
    """
    update: PartialUpdate = sql_for_partial_update(data, js_to_sql, allowed_columns=updatable_columns)
    table = model.__table__

    # Bind with the column types so values are converted per dialect
    params = update.named_params()
    binds = [
        bindparam(name, value, type_=table.c[column].type)
        for (name, value), column in zip(params.items(), update.columns)
    ]
    binds.append(bindparam("key", key, type_=table.c[key_column].type))

    stmt = text(
        f'UPDATE {table.name} SET {update.named_set_clause()} WHERE "{key_column}" = :key'
    ).bindparams(*binds)

    try:
        result = db.execute(stmt)
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"Update of {table.name} {key} rejected: {e.orig}")
        raise BadRequestError(conflict_message) from e

    if result.rowcount == 0:
        db.rollback()
        raise NotFoundError(not_found_message)

    db.commit()
    logger.info(f"Updated {table.name} {key}: {', '.join(update.columns)}")
