"""
Read (module, distribution) pairs from a CPAN 02packages index snapshot.
"""

from __future__ import annotations

import gzip
import logging
import re
from pathlib import Path
from typing import IO, Iterator, Optional, Tuple


logger = logging.getLogger(__name__)

_ARCHIVE_SUFFIXES = (".tar.gz", ".tar.bz2", ".tar.xz", ".tgz", ".zip", ".tar")
_DISTNAME = re.compile(r"^(?P<dist>.+?)-v?(?P<version>\d[\w.]*)(?:-TRIAL\d*)?$")


def distribution_from_path(path: str) -> Optional[str]:
    """Derive the distribution name from an archive path.

    >>> distribution_from_path("S/SU/SULLR/IO-Socket-SSL-2.074.tar.gz")
    'IO-Socket-SSL'
    """
    filename = path.rsplit("/", 1)[-1]
    for suffix in _ARCHIVE_SUFFIXES:
        if filename.endswith(suffix):
            filename = filename[: -len(suffix)]
            break
    if not filename:
        return None
    match = _DISTNAME.match(filename)
    return match.group("dist") if match else filename


def iter_package_lines(handle: IO[str]) -> Iterator[Tuple[str, str]]:
    """Yield ``(module, distribution)`` pairs from an open index file."""
    in_header = True
    for line in handle:
        line = line.strip()
        if in_header:
            # The header ends at the first blank line.
            if not line:
                in_header = False
            continue
        if not line:
            continue
        parts = line.split()
        if len(parts) < 3:
            logger.debug("Skipping index line: %r", line)
            continue
        distribution = distribution_from_path(parts[2])
        if distribution:
            yield parts[0], distribution


def read_package_index(path: Path) -> Iterator[Tuple[str, str]]:
    """Yield ``(module, distribution)`` pairs from a plain or gzipped snapshot.

    Raises:
        FileNotFoundError: if ``path`` does not exist.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Package index not found: {path}")
    logger.info("Reading package index %s", path)
    return _iter_file(path)


def _iter_file(path: Path) -> Iterator[Tuple[str, str]]:
    opener = gzip.open if path.suffix == ".gz" else open
    with opener(path, "rt", encoding="utf-8") as handle:
        yield from iter_package_lines(handle)
