"""Tests for the advisory_db package."""

import pytest


def test_package_import():
    """Test that the package can be imported."""
    import advisory_db
    assert advisory_db.__version__ == "0.1.0"


def test_cli_import():
    """Test that CLI module can be imported."""
    from advisory_db.cli import main
    assert callable(main)


def test_builder_import():
    """Test that builder module can be imported."""
    from advisory_db.builder import DatabaseBuilder
    assert DatabaseBuilder is not None


def test_query_errors_are_lookup_errors():
    """Query-time failures can be caught as LookupError."""
    from advisory_db import UnknownDistribution, UnknownModule

    assert issubclass(UnknownDistribution, LookupError)
    assert issubclass(UnknownModule, LookupError)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
