"""
Release history lookups against the MetaCPAN API.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import requests

from .interfaces import ReleaseHistoryService
from .models import ReleaseVersion
from .time_utils import parse_timestamp
from .versioning import Version


logger = logging.getLogger(__name__)

DEFAULT_METACPAN_URL = "https://fastapi.metacpan.org/v1"


@dataclass
class ReleaseCache:
    """In-memory caches for release history lookups."""

    releases: Dict[str, List[ReleaseVersion]] = field(default_factory=dict)
    main_modules: Dict[str, Optional[str]] = field(default_factory=dict)
    session: requests.Session = field(default_factory=requests.Session)


def _field(fields: Dict[str, Any], name: str) -> Optional[str]:
    # Search hits may wrap single values in a list.
    value = fields.get(name)
    if isinstance(value, list):
        value = value[0] if value else None
    return str(value) if value is not None else None


class MetaCPANReleaseHistory(ReleaseHistoryService):
    """Fetch releases and main modules of CPAN distributions."""

    def __init__(
        self,
        base_url: str = DEFAULT_METACPAN_URL,
        cache: Optional[ReleaseCache] = None,
        timeout: float = 30.0,
        page_size: int = 5000,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.cache = cache or ReleaseCache()
        self.timeout = timeout
        self.page_size = page_size

    def _get_json(self, url: str, params: Optional[Dict[str, Any]] = None) -> Dict:
        with self.cache.session.get(url, params=params, timeout=self.timeout) as response:
            response.raise_for_status()
            return response.json()

    def fetch_releases(self, distribution: str) -> List[ReleaseVersion]:
        """Return every release of ``distribution``, oldest version first."""
        if distribution in self.cache.releases:
            logger.debug("Cache hit: releases %s", distribution)
            return self.cache.releases[distribution]

        logger.info("Fetching releases for %s", distribution)
        data = self._get_json(
            f"{self.base_url}/release/_search",
            params={
                "q": f"distribution:{distribution}",
                "fields": "version,date",
                "size": self.page_size,
            },
        )

        releases = []
        for hit in data.get("hits", {}).get("hits", []):
            fields = hit.get("fields") or hit.get("_source") or {}
            version = _field(fields, "version")
            if not version:
                continue
            releases.append(ReleaseVersion(
                version=version,
                released_at=parse_timestamp(_field(fields, "date")),
            ))
        releases.sort(key=lambda release: Version(release.version))
        self.cache.releases[distribution] = releases
        return releases

    def fetch_main_module(self, distribution: str) -> Optional[str]:
        """Return the main module of the latest release of ``distribution``."""
        if distribution in self.cache.main_modules:
            return self.cache.main_modules[distribution]

        data = self._get_json(f"{self.base_url}/release/{distribution}")
        main_module = data.get("main_module")
        self.cache.main_modules[distribution] = main_module
        return main_module

    def get_release_history(
        self, distribution: str
    ) -> Tuple[List[ReleaseVersion], Optional[str]]:
        return self.fetch_releases(distribution), self.fetch_main_module(distribution)
