"""
Unit tests for the partial-update SQL builder.
"""

import pytest

from app.core.exceptions import BadRequestError, NoUpdateDataError
from app.core.sql import sql_for_partial_update


class TestSqlForPartialUpdate:
    """Tests for sql_for_partial_update"""

    def test_single_field(self):
        result = sql_for_partial_update({"firstName": "Aliya"}, {"firstName": "first_name"})

        assert result.set_clause == '"first_name"=$1'
        assert result.values == ["Aliya"]

    def test_multiple_fields_keep_order(self):
        """Unmapped fields pass through verbatim as the column name"""
        result = sql_for_partial_update(
            {"firstName": "Aliya", "age": 32},
            {"firstName": "first_name"},
        )

        assert result.set_clause == '"first_name"=$1, "age"=$2'
        assert result.values == ["Aliya", 32]
        assert result.columns == ("first_name", "age")

    def test_no_mapping(self):
        result = sql_for_partial_update({"age": 32}, {})

        assert result.set_clause == '"age"=$1'
        assert result.values == [32]

    def test_placeholders_follow_insertion_order(self):
        data = {"c": 3, "a": 1, "b": 2}
        result = sql_for_partial_update(data, {})

        assert result.set_clause == '"c"=$1, "a"=$2, "b"=$3'
        assert result.values == [3, 1, 2]

    def test_none_values_are_kept(self):
        """Setting a column to NULL is a real update, not a skipped field"""
        result = sql_for_partial_update({"logoUrl": None}, {"logoUrl": "logo_url"})

        assert result.set_clause == '"logo_url"=$1'
        assert result.values == [None]

    def test_no_data_raises(self):
        with pytest.raises(NoUpdateDataError):
            sql_for_partial_update({}, {})

    def test_no_data_is_a_bad_request(self):
        with pytest.raises(BadRequestError) as exc_info:
            sql_for_partial_update({}, {"firstName": "first_name"})
        assert exc_info.value.status_code == 400
        assert exc_info.value.message == "No data"


class TestAllowedColumns:
    """Tests for the optional column allow-list"""

    def test_allowed_columns_accepts_known(self):
        result = sql_for_partial_update(
            {"numEmployees": 10, "name": "New"},
            {"numEmployees": "num_employees"},
            allowed_columns={"num_employees", "name"},
        )

        assert result.set_clause == '"num_employees"=$1, "name"=$2'
        assert result.values == [10, "New"]

    def test_allowed_columns_rejects_unknown(self):
        with pytest.raises(BadRequestError) as exc_info:
            sql_for_partial_update(
                {"name": "New", 'x"=1; DROP TABLE users; --': 1},
                {},
                allowed_columns={"name"},
            )
        assert not isinstance(exc_info.value, NoUpdateDataError)
        assert "Cannot update field" in exc_info.value.message

    def test_allow_list_checks_resolved_column(self):
        """The alias target, not the external name, is what gets checked"""
        with pytest.raises(BadRequestError):
            sql_for_partial_update(
                {"companyHandle": "c2"},
                {"companyHandle": "company_handle"},
                allowed_columns={"title", "salary", "equity"},
            )


class TestNamedBinds:
    """Tests for rendering the clause with SQLAlchemy named binds"""

    def test_named_clause_and_params_pair_up(self):
        result = sql_for_partial_update(
            {"firstName": "Aliya", "age": 32},
            {"firstName": "first_name"},
        )

        assert result.named_set_clause() == '"first_name"=:p1, "age"=:p2'
        assert result.named_params() == {"p1": "Aliya", "p2": 32}

    def test_named_prefix(self):
        result = sql_for_partial_update({"title": "T"}, {})

        assert result.named_set_clause(prefix="v") == '"title"=:v1'
        assert result.named_params(prefix="v") == {"v1": "T"}
