"""
Version range predicates.

Advisories describe affected and fixed releases with compact range strings
such as ``<1.35``, ``>=1.14,<=1.15`` or ``==0.9``. Commas join clauses with
AND. A clause without an operator means ``==``. Parsing is total: text that
cannot be read degrades to :class:`Unconstrained` with a warning attached,
since the advisory corpus is not schema-validated before ingestion.
"""

from __future__ import annotations

import logging
import operator
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from .versioning import Version, compare_versions


logger = logging.getLogger(__name__)

# Longer operators first so that "<=" is not read as "<" followed by "=1.0".
OPERATORS: Tuple[str, ...] = ("<=", ">=", "==", "!=", "<", ">")

_OPERATOR_CHARS = set("<>=!~^")

_CHECKS: Dict[str, Callable[[int, int], bool]] = {
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
    "==": operator.eq,
    "!=": operator.ne,
}

VersionLike = Union[Version, str]


@dataclass(frozen=True)
class Unconstrained:
    """Matches every version.

    ``source`` keeps the text this predicate was read from, so a range that
    could not be parsed is still written out as it was given.
    """

    warning: Optional[str] = field(default=None, compare=False)
    source: Optional[str] = field(default=None, compare=False)

    def matches(self, version: VersionLike) -> bool:
        return True

    def __str__(self) -> str:
        return self.source or ""


@dataclass(frozen=True)
class Comparison:
    """A single ``op version`` clause."""

    op: str
    version: Version

    def __post_init__(self) -> None:
        if self.op not in _CHECKS:
            raise ValueError(f"Unsupported operator: {self.op!r}")
        object.__setattr__(self, "version", Version.parse(self.version))

    def matches(self, version: VersionLike) -> bool:
        return _CHECKS[self.op](compare_versions(version, self.version), 0)

    def __str__(self) -> str:
        return f"{self.op}{self.version}"


@dataclass(frozen=True)
class Conjunction:
    """All clauses must hold. An empty conjunction matches everything."""

    clauses: Tuple[Comparison, ...]

    def matches(self, version: VersionLike) -> bool:
        version = Version.parse(version)
        return all(clause.matches(version) for clause in self.clauses)

    def __str__(self) -> str:
        return ",".join(str(clause) for clause in self.clauses)


@dataclass(frozen=True)
class AnyOf:
    """At least one alternative must hold.

    Produced only for list-valued range fields, where each item is an
    independent range string.
    """

    alternatives: Tuple["RangePredicate", ...]

    def matches(self, version: VersionLike) -> bool:
        version = Version.parse(version)
        return any(alternative.matches(version) for alternative in self.alternatives)

    def __str__(self) -> str:
        return " || ".join(str(alternative) for alternative in self.alternatives)


RangePredicate = Union[Unconstrained, Comparison, Conjunction, AnyOf]


def _parse_clause(clause: str) -> Comparison:
    for op in OPERATORS:
        if clause.startswith(op):
            literal = clause[len(op):].strip()
            break
    else:
        if clause[0] in _OPERATOR_CHARS:
            raise ValueError(f"unknown operator in clause {clause!r}")
        op, literal = "==", clause

    if not literal:
        raise ValueError(f"clause {clause!r} has no version")
    if literal[0] in _OPERATOR_CHARS or any(ch.isspace() for ch in literal):
        raise ValueError(f"malformed version in clause {clause!r}")
    return Comparison(op, Version(literal))


def parse_range(text: Union[str, Sequence[str], None]) -> RangePredicate:
    """Parse a range string into a predicate. Never raises.

    A list of strings (as some advisory files use) is read as alternatives.
    """
    if text is None:
        return Unconstrained()
    if isinstance(text, (list, tuple)):
        alternatives = tuple(parse_range(item) for item in text)
        if not alternatives:
            return Unconstrained()
        if len(alternatives) == 1:
            return alternatives[0]
        return AnyOf(alternatives)

    text = str(text).strip()
    if not text:
        return Unconstrained()
    if text == "*":
        return Unconstrained(source=text)

    clauses = []
    for raw in text.split(","):
        raw = raw.strip()
        if not raw or raw == "*":
            continue
        try:
            clauses.append(_parse_clause(raw))
        except ValueError as e:
            warning = f"Ignoring range {text!r}: {e}"
            logger.warning(warning)
            return Unconstrained(warning=warning, source=text)

    if len(clauses) == 1:
        return clauses[0]
    return Conjunction(tuple(clauses))


def matches(predicate: RangePredicate, version: VersionLike) -> bool:
    """Return True when ``version`` satisfies ``predicate``."""
    return predicate.matches(version)


def parse_warnings(predicates: Iterable[Optional[RangePredicate]]) -> list:
    """Collect the warnings recorded while parsing ``predicates``."""
    warnings = []
    for predicate in predicates:
        if predicate is None:
            continue
        if isinstance(predicate, AnyOf):
            warnings.extend(parse_warnings(predicate.alternatives))
        elif isinstance(predicate, Unconstrained) and predicate.warning:
            warnings.append(predicate.warning)
    return warnings


def range_to_data(predicate: RangePredicate) -> Union[str, List[str]]:
    """Render a predicate as text ``parse_range`` reads back.

    Alternatives become a list of range strings, the form they came in.
    """
    if isinstance(predicate, AnyOf):
        return [str(alternative) for alternative in predicate.alternatives]
    return str(predicate)
