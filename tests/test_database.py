"""Tests for engine configuration and store error translation."""

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from app.database import connect_args_for, store_errors
from app.exceptions import StoreError


class TestConnectArgs:
    """Tests for per-driver connection arguments shared by the app and migrations."""

    def test_sqlite_allows_cross_thread_use(self):
        assert connect_args_for("sqlite:///./prof_smart.db", 5000) == {"check_same_thread": False}

    def test_postgres_gets_statement_timeout(self):
        args = connect_args_for("postgresql://u:p@db/prof_smart", 2500)
        assert args == {"options": "-c statement_timeout=2500"}

    def test_other_drivers_get_no_arguments(self):
        assert connect_args_for("mysql://u:p@db/prof_smart", 5000) == {}


class TestStoreErrors:
    def test_translates_and_rolls_back(self, db_session: Session):
        with pytest.raises(StoreError) as exc_info:
            with store_errors(db_session, "Error saving stats."):
                raise OperationalError("UPDATE game_stats secret_sql", {}, Exception("db down"))
        assert exc_info.value.message == "Error saving stats."
        assert "secret_sql" not in str(exc_info.value)

    def test_app_errors_pass_through(self, db_session: Session):
        with pytest.raises(KeyError):
            with store_errors(db_session):
                raise KeyError("not a database error")
