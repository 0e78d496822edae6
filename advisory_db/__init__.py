"""
Advisory Database

Build a security advisory database for CPAN distributions and decide which
advisories affect an installed version.
"""

__version__ = "0.1.0"

from .exceptions import AdvisoryDBError, MalformedAdvisory, UnknownDistribution, UnknownModule
from .ledger import DistributionLedger, LedgerEntry
from .matcher import find_vulnerabilities, find_vulnerabilities_by_module
from .models import Advisory, ReleaseVersion
from .module_index import ModuleIndex
from .ranges import AnyOf, Comparison, Conjunction, Unconstrained, matches, parse_range
from .versioning import Version, compare_versions

__all__ = [
    "Advisory",
    "AdvisoryDBError",
    "AnyOf",
    "Comparison",
    "Conjunction",
    "DistributionLedger",
    "LedgerEntry",
    "MalformedAdvisory",
    "ModuleIndex",
    "ReleaseVersion",
    "Unconstrained",
    "UnknownDistribution",
    "UnknownModule",
    "Version",
    "compare_versions",
    "find_vulnerabilities",
    "find_vulnerabilities_by_module",
    "matches",
    "parse_range",
]
