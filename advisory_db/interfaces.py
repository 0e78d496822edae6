"""
Interfaces for the external collaborators of a database build.
"""

from __future__ import annotations

from typing import Iterable, Optional, Protocol, Tuple

from .models import ReleaseVersion


class ReleaseHistoryService(Protocol):
    """Provide the release history of a distribution."""

    def get_release_history(
        self, distribution: str
    ) -> Tuple[Iterable[ReleaseVersion], Optional[str]]:
        """Return the ordered releases and the main module name."""
        ...
