"""
Load advisory records from a local directory of YAML files.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, List, Union

import yaml
from tqdm import tqdm

from .exceptions import MalformedAdvisory
from .models import Advisory


logger = logging.getLogger(__name__)

ADVISORY_GLOB = "*.yml"


@dataclass
class LoadReport:
    """Advisories read from a corpus and the records that were rejected."""

    advisories: List[Advisory] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    files: int = 0


def parse_advisory_records(records: Any, source: str, report: LoadReport) -> None:
    """Validate the records of one file, collecting failures into ``report``."""
    if records is None:
        return
    if isinstance(records, dict):
        records = [records]
    if not isinstance(records, list):
        report.errors.append(f"[{source}] expected a list of advisories")
        return

    for record in records:
        try:
            report.advisories.append(Advisory.from_record(record, source=source))
        except MalformedAdvisory as e:
            logger.warning("Skipping advisory: %s", e)
            report.errors.append(str(e))


def load_advisory_file(path: Path, report: LoadReport) -> None:
    try:
        with open(path, "r", encoding="utf-8") as f:
            records = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Error reading %s: %s", path, e)
        report.errors.append(f"[{path.name}] {e}")
        return
    parse_advisory_records(records, path.name, report)


def load_advisories(
    paths: Union[Path, Iterable[Path]],
    show_progress: bool = True,
) -> LoadReport:
    """Load every advisory file under a directory (or from a list of files).

    A bad record or an unreadable file is reported and skipped; it never
    aborts the rest of the batch.

    Raises:
        FileNotFoundError: if a directory is given and does not exist.
    """
    if isinstance(paths, (str, Path)):
        directory = Path(paths)
        if not directory.is_dir():
            raise FileNotFoundError(f"Advisory directory not found: {directory}")
        files = sorted(directory.rglob(ADVISORY_GLOB))
    else:
        files = sorted(Path(p) for p in paths)

    report = LoadReport()
    logger.info("Loading %d advisory files", len(files))
    for path in tqdm(files, desc="Loading advisories", disable=not show_progress):
        load_advisory_file(path, report)
        report.files += 1

    logger.info(
        "Loaded %d advisories from %d files (%d rejected)",
        len(report.advisories),
        report.files,
        len(report.errors),
    )
    return report
