"""
Exceptions raised by the advisory database.
"""

from __future__ import annotations

from typing import Optional


class AdvisoryDBError(Exception):
    """Base exception for advisory database operations."""


class MalformedAdvisory(AdvisoryDBError, ValueError):
    """An advisory record is missing its id or distribution."""

    def __init__(self, message: str, record_id: Optional[str] = None, source: Optional[str] = None):
        self.record_id = record_id
        self.source = source
        super().__init__(message)

    def __str__(self):
        if self.source:
            return f"[{self.source}] {super().__str__()}"
        return super().__str__()


class UnknownDistribution(AdvisoryDBError, LookupError):
    """The distribution has no entry in the ledger."""

    def __init__(self, distribution: str):
        self.distribution = distribution
        super().__init__(f"Distribution not tracked: {distribution}")


class UnknownModule(AdvisoryDBError, LookupError):
    """The module is not present in the module index."""

    def __init__(self, module: str):
        self.module = module
        super().__init__(f"Module not indexed: {module}")
