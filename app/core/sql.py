"""
Helpers for building selective (partial) UPDATE statements.

The SET clause is generated from the caller's field map so that update code
never concatenates values into SQL by hand. Values are always bound as
parameters. Column names cannot be bound, so they are quoted and
interpolated; pass ``allowed_columns`` to restrict them to a known set.
"""

from dataclasses import dataclass
from typing import Any, Collection, Dict, List, Mapping, Optional, Tuple

from app.core.exceptions import BadRequestError, NoUpdateDataError


@dataclass(frozen=True)
class PartialUpdate:
    """
    A SET clause and its parameters.

    Placeholder $N in ``set_clause`` refers to ``values[N-1]``; ``columns``
    holds the resolved column names in the same order.
    """
    set_clause: str
    values: List[Any]
    columns: Tuple[str, ...]

    def named_set_clause(self, prefix: str = "p") -> str:
        """Same clause with SQLAlchemy named binds: '"col"=:p1, ...'."""
        return ", ".join(
            f'"{column}"=:{prefix}{idx}' for idx, column in enumerate(self.columns, start=1)
        )

    def named_params(self, prefix: str = "p") -> Dict[str, Any]:
        """Bind values keyed to match named_set_clause()."""
        return {f"{prefix}{idx}": value for idx, value in enumerate(self.values, start=1)}


def sql_for_partial_update(
    data: Mapping[str, Any],
    js_to_sql: Mapping[str, str],
    allowed_columns: Optional[Collection[str]] = None,
) -> PartialUpdate:
    """
    Build the SET clause for updating only the supplied fields.

    Args:
        data: Field names to new values, in the order they should appear
        js_to_sql: External field name -> column name; unmapped fields are
            used verbatim as the column name
        allowed_columns: Optional allow-list of column names

    Returns:
        PartialUpdate, e.g. {"firstName": "Aliya", "age": 32} with
        {"firstName": "first_name"} gives '"first_name"=$1, "age"=$2'
        and values ["Aliya", 32]

    Raises:
        NoUpdateDataError: data is empty
        BadRequestError: a field resolves to a column outside allowed_columns
    """
    if not data:
        raise NoUpdateDataError()

    columns = []
    values = []
    for field, value in data.items():
        column = js_to_sql.get(field, field)
        if allowed_columns is not None and column not in allowed_columns:
            raise BadRequestError(f"Cannot update field: {field}")
        columns.append(column)
        values.append(value)

    set_clause = ", ".join(
        f'"{column}"=${idx}' for idx, column in enumerate(columns, start=1)
    )
    return PartialUpdate(set_clause=set_clause, values=values, columns=tuple(columns))
