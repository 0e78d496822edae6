"""
Build configuration.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .release_history import DEFAULT_METACPAN_URL


@dataclass(frozen=True)
class BuildConfig:
    """Inputs and options for one database build."""

    advisories_dir: Path
    packages_file: Optional[Path] = None
    output_dir: Path = Path("./output")
    fetch_releases: bool = False
    metacpan_url: str = DEFAULT_METACPAN_URL
    show_progress: bool = True
