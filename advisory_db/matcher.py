"""
Read-time vulnerability queries over a built ledger.
"""

from __future__ import annotations

from typing import List, Union

from .ledger import DistributionLedger
from .models import Advisory
from .module_index import ModuleIndex
from .versioning import Version


def find_vulnerabilities(
    ledger: DistributionLedger,
    distribution: str,
    installed_version: Union[Version, str],
) -> List[Advisory]:
    """Return advisories affecting ``installed_version`` of ``distribution``.

    Raises:
        UnknownDistribution: if the ledger does not track ``distribution``.
    """
    entry = ledger.lookup(distribution)
    version = Version.parse(installed_version)
    return [advisory for advisory in entry.advisories if advisory.is_vulnerable(version)]


def find_vulnerabilities_by_module(
    module_index: ModuleIndex,
    ledger: DistributionLedger,
    module_name: str,
    installed_version: Union[Version, str],
) -> List[Advisory]:
    """Like :func:`find_vulnerabilities`, starting from a module name.

    Raises:
        UnknownModule: if the module is not indexed.
        UnknownDistribution: if the resolved distribution is not tracked.
    """
    distribution = module_index.resolve(module_name)
    return find_vulnerabilities(ledger, distribution, installed_version)
