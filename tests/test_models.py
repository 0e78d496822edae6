"""Tests for advisory records."""

from datetime import date

import pytest

from advisory_db.exceptions import MalformedAdvisory
from advisory_db.models import Advisory
from advisory_db.ranges import Comparison, Unconstrained


def make_record(**overrides):
    record = {
        "id": "CPANSA-IO-Socket-SSL-2010-4334",
        "distribution": "IO-Socket-SSL",
        "affected_versions": "<1.35",
        "fixed_versions": None,
        "cves": ["CVE-2010-4334"],
        "description": "fails open to VERIFY_NONE\n",
        "references": ["http://osvdb.org/69626"],
        "reported": date(2011, 1, 14),
        "severity": None,
    }
    record.update(overrides)
    return record


def test_from_record_maps_fields():
    advisory = Advisory.from_record(make_record())

    assert advisory.id == "CPANSA-IO-Socket-SSL-2010-4334"
    assert advisory.distribution == "IO-Socket-SSL"
    assert advisory.affected_versions == Comparison("<", "1.35")
    assert advisory.fixed_versions is None
    assert advisory.cves == ("CVE-2010-4334",)
    assert advisory.description == "fails open to VERIFY_NONE"
    assert advisory.references == ("http://osvdb.org/69626",)
    assert advisory.reported == date(2011, 1, 14)
    assert advisory.severity is None


def test_from_record_degrades_optional_fields():
    advisory = Advisory.from_record({"id": "X-1", "distribution": "Foo"})

    assert advisory.affected_versions == Unconstrained()
    assert advisory.fixed_versions is None
    assert advisory.cves == ()
    assert advisory.references == ()
    assert advisory.description == ""
    assert advisory.reported is None


def test_numeric_range_values_become_text():
    advisory = Advisory.from_record(make_record(affected_versions=1.35, reported="2011-01-14"))

    assert advisory.affected_versions == Comparison("==", "1.35")
    assert advisory.reported == date(2011, 1, 14)


@pytest.mark.parametrize("missing", ["id", "distribution"])
def test_missing_identity_is_malformed(missing):
    record = make_record()
    record[missing] = None

    with pytest.raises(MalformedAdvisory):
        Advisory.from_record(record, source="CPANSA-IO-Socket-SSL.yml")


def test_blank_identity_is_malformed():
    with pytest.raises(MalformedAdvisory):
        Advisory.from_record(make_record(distribution="  "))
    with pytest.raises(MalformedAdvisory):
        Advisory(id="", distribution="Foo")
    with pytest.raises(MalformedAdvisory):
        Advisory.from_record(["not", "a", "mapping"])


def test_is_vulnerable_without_fixed_range():
    advisory = Advisory.from_record(make_record())

    assert advisory.is_vulnerable("1.34") is True
    assert advisory.is_vulnerable("1.35") is False


def test_is_vulnerable_with_vacuous_fixed_range():
    advisory = Advisory.from_record(make_record(affected_versions=">=1.0", fixed_versions="<1.0"))

    assert advisory.is_vulnerable("1.0") is True
    assert advisory.is_vulnerable("2.0") is True
    assert advisory.is_vulnerable("0.9") is False


def test_is_vulnerable_excludes_fixed_versions():
    advisory = Advisory.from_record(make_record(affected_versions="<2.0", fixed_versions=">=1.5"))

    assert advisory.is_vulnerable("1.4") is True
    assert advisory.is_vulnerable("1.5") is False


def test_to_dict_renders_ranges_as_text():
    advisory = Advisory.from_record(make_record(affected_versions=">=1.14,<=1.15"))
    data = advisory.to_dict()

    assert data["affected_versions"] == ">=1.14,<=1.15"
    assert data["fixed_versions"] is None
    assert data["reported"] == "2011-01-14"
    assert data["cves"] == ["CVE-2010-4334"]


def test_to_dict_keeps_unreadable_and_list_ranges():
    unreadable = Advisory.from_record(make_record(affected_versions="=>1.0"))
    alternatives = Advisory.from_record(make_record(affected_versions=["<1.0", ">=2.0,<2.5"]))

    assert unreadable.to_dict()["affected_versions"] == "=>1.0"
    assert alternatives.to_dict()["affected_versions"] == ["<1.0", ">=2.0,<2.5"]


@pytest.mark.parametrize("fixed", [None, "", "  ", [], ["  "]])
def test_blank_fixed_range_is_absent(fixed):
    advisory = Advisory.from_record(make_record(affected_versions="<2.0", fixed_versions=fixed))

    assert advisory.fixed_versions is None
    assert advisory.is_vulnerable("1.0") is True


def test_unreadable_fixed_range_never_marks_fixed():
    advisory = Advisory.from_record(make_record(affected_versions="<2.0", fixed_versions="=>1.5"))

    assert advisory.fixed_versions is None
    assert advisory.is_vulnerable("1.0") is True
    assert advisory.is_vulnerable("1.9") is True
    assert len(advisory.warnings) == 1
    assert "=>1.5" in advisory.warnings[0]


def test_list_fixed_range_with_unreadable_item_is_absent():
    advisory = Advisory.from_record(
        make_record(affected_versions="<2.0", fixed_versions=[">=1.5,<1.6", "~1.8"])
    )

    assert advisory.fixed_versions is None
    assert advisory.is_vulnerable("1.5") is True
    assert advisory.warnings


def test_list_fixed_range_excludes_each_alternative():
    advisory = Advisory.from_record(
        make_record(affected_versions="<2.0", fixed_versions=[">=1.5,<1.6", ">=1.8"])
    )

    assert advisory.is_vulnerable("1.4") is True
    assert advisory.is_vulnerable("1.5.1") is False
    assert advisory.is_vulnerable("1.7") is True
    assert advisory.is_vulnerable("1.9") is False
    assert advisory.warnings == ()


def test_unreadable_affected_range_flags_every_version():
    advisory = Advisory.from_record(make_record(affected_versions="=>1.0"))

    assert advisory.is_vulnerable("0.1") is True
    assert advisory.is_vulnerable("5.0") is True
    assert len(advisory.warnings) == 1
