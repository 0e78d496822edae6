"""
Assemble the advisory database from its inputs.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

import requests
from tqdm import tqdm

from .config import BuildConfig
from .interfaces import ReleaseHistoryService
from .ledger import DistributionLedger
from .loader import load_advisories
from .module_index import ModuleIndex
from .package_index import read_package_index
from .release_history import MetaCPANReleaseHistory


logger = logging.getLogger(__name__)


@dataclass
class AdvisoryDatabase:
    """A built ledger, its module index and the problems met on the way."""

    ledger: DistributionLedger
    module_index: ModuleIndex = field(default_factory=ModuleIndex)
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def summary(self) -> dict:
        return {
            "distributions": len(self.ledger),
            "advisories": self.ledger.advisory_count(),
            "modules": len(self.module_index),
            "errors": len(self.errors),
            "warnings": len(self.warnings),
        }


class DatabaseBuilder:
    """Run one build: ingest, enrich, index."""

    def __init__(
        self,
        config: BuildConfig,
        release_history: Optional[ReleaseHistoryService] = None,
    ) -> None:
        """Initialize the builder.

        Args:
            config: Build inputs and options
            release_history: Release history source; defaults to MetaCPAN when
                ``config.fetch_releases`` is set
        """
        self.config = config
        if release_history is None and config.fetch_releases:
            release_history = MetaCPANReleaseHistory(config.metacpan_url)
        self.release_history = release_history

    def ingest(self, database: AdvisoryDatabase) -> None:
        report = load_advisories(self.config.advisories_dir, show_progress=self.config.show_progress)
        database.errors.extend(report.errors)
        database.ledger.ingest_advisories(report.advisories)
        # Only advisories that survived same-id replacement report warnings.
        for entry in database.ledger.entries():
            for advisory in entry.advisories:
                database.warnings.extend(f"{advisory.id}: {warning}" for warning in advisory.warnings)

    def enrich(self, database: AdvisoryDatabase) -> None:
        ledger = database.ledger
        for distribution in tqdm(
            ledger.distributions(),
            desc="Fetching release history",
            disable=not self.config.show_progress,
        ):
            try:
                versions, main_module = self.release_history.get_release_history(distribution)
            except requests.RequestException as e:
                logger.warning("Release history unavailable for %s: %s", distribution, e)
                continue
            ledger.enrich(distribution, versions, main_module)

    def index(self, database: AdvisoryDatabase) -> None:
        snapshot = read_package_index(self.config.packages_file)
        database.module_index = ModuleIndex.build(snapshot, database.ledger)

    def build(self) -> AdvisoryDatabase:
        """Build the database.

        Returns:
            The populated AdvisoryDatabase
        """
        database = AdvisoryDatabase(ledger=DistributionLedger())
        self.ingest(database)
        if self.release_history is not None:
            self.enrich(database)
        if self.config.packages_file is not None:
            self.index(database)
        logger.info("Built advisory database: %s", database.summary())
        return database
