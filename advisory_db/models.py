"""
Core data models for the advisory database.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, Mapping, Optional, Tuple

from .exceptions import MalformedAdvisory
from .ranges import RangePredicate, Unconstrained, parse_range, parse_warnings, range_to_data
from .time_utils import parse_date
from .versioning import Version


@dataclass(frozen=True)
class ReleaseVersion:
    """A distribution release with its release date."""

    version: str
    released_at: Optional[datetime] = None


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _text_list(value: Any) -> Tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, (str, int, float)):
        value = [value]
    return tuple(str(item).strip() for item in value if item is not None and str(item).strip())


def _range_source(value: Any):
    # YAML reads "1.35" as a float; ranges are always text.
    if isinstance(value, (list, tuple)):
        return [item for item in (_text(v) for v in value) if item is not None]
    return _text(value)


@dataclass(frozen=True)
class Advisory:
    """A single reported vulnerability against a distribution."""

    id: str
    distribution: str
    affected_versions: RangePredicate = field(default_factory=Unconstrained)
    fixed_versions: Optional[RangePredicate] = None
    cves: Tuple[str, ...] = ()
    description: str = ""
    references: Tuple[str, ...] = ()
    severity: Optional[str] = None
    reported: Optional[date] = None
    warnings: Tuple[str, ...] = field(default=(), compare=False, repr=False)

    def __post_init__(self) -> None:
        if not self.id or not str(self.id).strip():
            raise MalformedAdvisory("advisory is missing its id")
        if not self.distribution or not str(self.distribution).strip():
            raise MalformedAdvisory(
                f"advisory {self.id} is missing its distribution", record_id=self.id
            )

    @classmethod
    def from_record(cls, record: Mapping[str, Any], source: Optional[str] = None) -> "Advisory":
        """Validate a raw advisory mapping and build an Advisory from it.

        Only ``id`` and ``distribution`` are mandatory. Every other field
        degrades to an empty or absent value when it is missing.

        Raises:
            MalformedAdvisory: if ``id`` or ``distribution`` is missing.
        """
        if not isinstance(record, Mapping):
            raise MalformedAdvisory(
                f"expected a mapping, got {type(record).__name__}", source=source
            )

        advisory_id = _text(record.get("id"))
        if advisory_id is None:
            raise MalformedAdvisory("advisory is missing its id", source=source)
        distribution = _text(record.get("distribution"))
        if distribution is None:
            raise MalformedAdvisory(
                f"advisory {advisory_id} is missing its distribution",
                record_id=advisory_id,
                source=source,
            )

        affected = parse_range(_range_source(record.get("affected_versions")))
        fixed_source = _range_source(record.get("fixed_versions"))
        fixed = parse_range(fixed_source) if fixed_source else None
        warnings = parse_warnings([affected, fixed])
        if fixed is not None and parse_warnings([fixed]):
            # An unreadable fixed range must not mark every version as fixed.
            fixed = None

        return cls(
            id=advisory_id,
            distribution=distribution,
            affected_versions=affected,
            fixed_versions=fixed,
            cves=_text_list(record.get("cves")),
            description=(_text(record.get("description")) or ""),
            references=_text_list(record.get("references")),
            severity=_text(record.get("severity")),
            reported=parse_date(record.get("reported")),
            warnings=tuple(warnings),
        )

    def is_vulnerable(self, version) -> bool:
        """Return True if ``version`` is affected and not known to be fixed.

        An absent fixed range never counts as fixed.
        """
        version = Version.parse(version)
        if not self.affected_versions.matches(version):
            return False
        if self.fixed_versions is not None and self.fixed_versions.matches(version):
            return False
        return True

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "distribution": self.distribution,
            "cves": list(self.cves),
            "description": self.description,
            "affected_versions": range_to_data(self.affected_versions),
            "fixed_versions": range_to_data(self.fixed_versions) if self.fixed_versions is not None else None,
            "references": list(self.references),
            "severity": self.severity,
            "reported": self.reported.isoformat() if self.reported else None,
        }
