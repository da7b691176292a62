"""Tests for database decorators."""
import pytest
from unittest.mock import MagicMock

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from compack.core.exceptions import DatabaseError
from compack.core.logging_manager import PackLogger
from compack.database.decorators import handle_db_errors, log_database_operation


class _Service:
    def __init__(self, logger=None):
        self.logger = logger

    @log_database_operation("sample_operation")
    def run(self, value):
        if isinstance(value, Exception):
            raise value
        return value * 2


class TestLogDatabaseOperation:
    """Tests for the log_database_operation decorator."""

    def test_successful_operation(self):
        """Completion should be logged with timing."""
        mock_logger = MagicMock(spec=PackLogger)

        assert _Service(mock_logger).run(2) == 4

        mock_logger.log_debug.assert_called_once()
        assert "Starting sample_operation" in mock_logger.log_debug.call_args[0][0]
        name, details = mock_logger.log_operation.call_args[0]
        assert name == "sample_operation_completed"
        assert details["success"] is True
        assert isinstance(details["duration_seconds"], float)

    def test_without_logger(self):
        """A missing logger should not break the operation."""
        assert _Service().run(3) == 6

    def test_errors_logged_and_reraised(self):
        """Exceptions should be logged and propagate unchanged."""
        mock_logger = MagicMock(spec=PackLogger)

        with pytest.raises(ValueError):
            _Service(mock_logger).run(ValueError("invalid value"))

        mock_logger.log_error.assert_called_once()
        assert mock_logger.log_error.call_args[0][1]["operation"] == "sample_operation"


class TestHandleDbErrors:
    """Tests for the handle_db_errors decorator."""

    def test_integrity_error_raises_database_error(self):
        """IntegrityError should become DatabaseError."""

        @handle_db_errors
        def failing():
            raise IntegrityError("statement", {}, Exception("duplicate"))

        with pytest.raises(DatabaseError, match="Data integrity violation"):
            failing()

    def test_sqlalchemy_error_raises_database_error(self):
        """SQLAlchemyError should become DatabaseError."""

        @handle_db_errors
        def failing():
            raise SQLAlchemyError("connection failed")

        with pytest.raises(DatabaseError, match="Database operation failed"):
            failing()

    def test_other_exceptions_propagate(self):
        """Non-SQLAlchemy exceptions should pass through."""

        @handle_db_errors
        def failing():
            raise ValueError("invalid value")

        with pytest.raises(ValueError):
            failing()
