"""
Distribution ledger: advisories and release metadata keyed by distribution.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Dict, Iterable, Iterator, List, Optional, Tuple, Union

from .exceptions import UnknownDistribution
from .models import Advisory, ReleaseVersion


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LedgerEntry:
    """Everything known about one distribution.

    Entries are immutable snapshots; the ledger replaces them on every write.
    """

    distribution: str
    advisories: Tuple[Advisory, ...] = ()
    versions: Tuple[ReleaseVersion, ...] = ()
    main_module: Optional[str] = None

    def __len__(self) -> int:
        return len(self.advisories)


ReleaseLike = Union[ReleaseVersion, str, Tuple[str, Optional[datetime]]]


def _release(item: ReleaseLike) -> ReleaseVersion:
    if isinstance(item, ReleaseVersion):
        return item
    if isinstance(item, str):
        return ReleaseVersion(version=item)
    version, released_at = item
    return ReleaseVersion(version=str(version), released_at=released_at)


class DistributionLedger:
    """In-memory store mapping distributions to advisories and releases.

    The ledger is filled once (ingestion, then enrichment) and read many times
    afterwards. It makes no promise about reads interleaved with writes.
    """

    def __init__(self) -> None:
        self._entries: Dict[str, LedgerEntry] = {}
        self._advisories: Dict[str, Dict[str, Advisory]] = {}

    def ingest_advisory(self, advisory: Advisory) -> LedgerEntry:
        """Add an advisory, replacing any earlier advisory with the same id."""
        distribution = advisory.distribution
        entry = self._entries.get(distribution)
        if entry is None:
            entry = LedgerEntry(distribution=distribution)
        by_id = self._advisories.setdefault(distribution, {})
        if advisory.id in by_id:
            logger.debug("Replacing advisory %s for %s", advisory.id, distribution)
        by_id[advisory.id] = advisory
        entry = replace(entry, advisories=tuple(by_id.values()))
        self._entries[distribution] = entry
        return entry

    def ingest_advisories(self, advisories: Iterable[Advisory]) -> int:
        count = 0
        for advisory in advisories:
            self.ingest_advisory(advisory)
            count += 1
        return count

    def enrich(
        self,
        distribution: str,
        versions: Iterable[ReleaseLike],
        main_module: Optional[str],
    ) -> LedgerEntry:
        """Attach release history and main module to a distribution.

        Repeated calls are allowed; the last one wins.

        Raises:
            UnknownDistribution: if no advisory was ingested for ``distribution``.
        """
        entry = replace(
            self.lookup(distribution),
            versions=tuple(_release(item) for item in versions),
            main_module=main_module,
        )
        self._entries[distribution] = entry
        return entry

    def lookup(self, distribution: str) -> LedgerEntry:
        """Return the entry for ``distribution``.

        Raises:
            UnknownDistribution: if the distribution is not tracked.
        """
        try:
            return self._entries[distribution]
        except KeyError:
            raise UnknownDistribution(distribution) from None

    def get(self, distribution: str) -> Optional[LedgerEntry]:
        return self._entries.get(distribution)

    def distributions(self) -> List[str]:
        return list(self._entries)

    def entries(self) -> Iterator[LedgerEntry]:
        return iter(self._entries.values())

    def advisory_count(self) -> int:
        return sum(len(entry) for entry in self._entries.values())

    def __contains__(self, distribution: object) -> bool:
        return distribution in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)
