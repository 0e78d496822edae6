"""
Module name to distribution name index.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Iterator, Tuple

from .exceptions import UnknownModule
from .ledger import DistributionLedger


logger = logging.getLogger(__name__)


class ModuleIndex:
    """Map importable module names to the distribution that ships them.

    Only modules whose distribution is tracked by the ledger are kept. The
    index is a derived view and holds distribution names, not entries.
    """

    def __init__(self, mapping: Dict[str, str] = None) -> None:
        self._modules: Dict[str, str] = dict(mapping or {})

    @classmethod
    def build(
        cls,
        snapshot: Iterable[Tuple[str, str]],
        ledger: DistributionLedger,
    ) -> "ModuleIndex":
        """Build an index from ``(module, distribution)`` pairs.

        A module seen more than once resolves to its last observed owner.
        """
        modules: Dict[str, str] = {}
        seen = 0
        for module, distribution in snapshot:
            seen += 1
            if distribution not in ledger:
                continue
            modules[module] = distribution
        logger.info("Indexed %d of %d modules", len(modules), seen)
        return cls(modules)

    def resolve(self, module_name: str) -> str:
        """Return the distribution that provides ``module_name``.

        Raises:
            UnknownModule: if the module is not indexed.
        """
        try:
            return self._modules[module_name]
        except KeyError:
            raise UnknownModule(module_name) from None

    def items(self) -> Iterator[Tuple[str, str]]:
        return iter(self._modules.items())

    def __contains__(self, module_name: object) -> bool:
        return module_name in self._modules

    def __len__(self) -> int:
        return len(self._modules)
