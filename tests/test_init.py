"""Tests for the public API exposed by __init__.py."""

import logging

import pynomis
from pynomis import (
    APIError,
    DataQuery,
    DatasetNotFoundError,
    EmptyResultError,
    NomisCatalogue,
    NomisError,
    SexDimension,
    ValidationError,
    get_data,
)


class TestPublicImports:
    """Test that all public API items are importable."""

    def test_get_data_importable(self):
        """Test that get_data is importable and callable."""
        assert callable(get_data)

    def test_catalogue_importable(self):
        """Test that NomisCatalogue is importable."""
        assert NomisCatalogue is not None

    def test_types_importable(self):
        """Test that DataQuery and SexDimension are importable."""
        assert DataQuery is not None
        assert SexDimension.SEX is not None
        assert SexDimension.C_SEX is not None

    def test_exceptions_importable(self):
        """Test that exceptions are importable."""
        assert NomisError is not None
        assert APIError is not None
        assert DatasetNotFoundError is not None
        assert ValidationError is not None
        assert EmptyResultError is not None

    def test_all_names_exist(self):
        """Test that every name in __all__ is defined."""
        for name in pynomis.__all__:
            assert hasattr(pynomis, name)


class TestPackageMetadata:
    """Tests for package-level attributes."""

    def test_version_is_string(self):
        """Test that __version__ is a non-empty string."""
        assert isinstance(pynomis.__version__, str)
        assert pynomis.__version__

    def test_null_handler_installed(self):
        """Test that the package logger has a NullHandler."""
        handlers = logging.getLogger("pynomis").handlers
        assert any(isinstance(h, logging.NullHandler) for h in handlers)
