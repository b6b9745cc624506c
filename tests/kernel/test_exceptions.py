"""Tests for the typed exception hierarchy."""

import pytest

from erp_kernel.exceptions import (
    ClassificationError,
    ConfigurationError,
    DataAccessError,
    EngineNotInitializedError,
    ErpKernelError,
    InvalidTimeFormatError,
    RowShapeError,
    UnknownBucketError,
)


class TestExceptionHierarchy:
    @pytest.mark.parametrize(
        "exc, code",
        [
            (RowShapeError("invoice", ["id"]), "ROW_SHAPE_MISMATCH"),
            (ConfigurationError("digest_hour", "out of range"), "INVALID_CONFIGURATION"),
            (InvalidTimeFormatError("25:00"), "INVALID_TIME_FORMAT"),
            (UnknownBucketError(45, 2), "UNKNOWN_BUCKET"),
            (EngineNotInitializedError(), "ENGINE_NOT_INITIALIZED"),
        ],
    )
    def test_codes(self, exc, code):
        assert isinstance(exc, ErpKernelError)
        assert exc.code == code

    def test_classification_family(self):
        assert issubclass(InvalidTimeFormatError, ClassificationError)
        assert issubclass(UnknownBucketError, ClassificationError)

    def test_data_access_family(self):
        assert issubclass(EngineNotInitializedError, DataAccessError)

    def test_structured_fields(self):
        exc = ConfigurationError("aging_boundaries", "must be ascending")
        assert exc.field == "aging_boundaries"
        assert exc.reason == "must be ascending"
        assert "aging_boundaries" in str(exc)

    def test_unknown_bucket_message(self):
        exc = UnknownBucketError(45, 2)
        assert exc.days == 45
        assert exc.bucket_count == 2
        assert "45" in str(exc)
