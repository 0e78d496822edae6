"""
Reporting and export utilities.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict

import pandas as pd

from .builder import AdvisoryDatabase


logger = logging.getLogger(__name__)

ADVISORY_COLUMNS = [
    "distribution",
    "id",
    "cves",
    "affected_versions",
    "fixed_versions",
    "severity",
    "reported",
    "description",
    "references",
]


def print_summary(database: AdvisoryDatabase) -> None:
    summary = database.summary()
    logger.info("=" * 60)
    logger.info("ADVISORY DATABASE")
    logger.info("=" * 60)
    logger.info("Distributions: %s", summary["distributions"])
    logger.info("Advisories: %s", summary["advisories"])
    logger.info("Indexed modules: %s", summary["modules"])
    logger.info("-" * 60)
    logger.info("Rejected records: %s", summary["errors"])
    logger.info("Range warnings: %s", summary["warnings"])
    logger.info("=" * 60)


def database_to_dict(database: AdvisoryDatabase) -> Dict[str, Any]:
    """Return the database as plain data for serialization."""
    dists = {}
    for entry in database.ledger.entries():
        dists[entry.distribution] = {
            "advisories": [advisory.to_dict() for advisory in entry.advisories],
            "main_module": entry.main_module,
            "versions": [
                {
                    "version": release.version,
                    "date": release.released_at.isoformat() if release.released_at else None,
                }
                for release in entry.versions
            ],
        }
    return {
        "dists": dists,
        "module2dist": dict(database.module_index.items()),
    }


def save_database_json(database: AdvisoryDatabase, output_dir: Path, name: str = "advisory_db") -> Path:
    output_dir.mkdir(parents=True, exist_ok=True)
    database_file = output_dir / f"{name}.json"
    with open(database_file, 'w', encoding='utf-8') as f:
        json.dump(database_to_dict(database), f, indent=2, default=str)
    return database_file


def advisories_dataframe(database: AdvisoryDatabase) -> pd.DataFrame:
    """Flatten the ledger into one row per advisory."""
    rows = []
    for entry in database.ledger.entries():
        for advisory in entry.advisories:
            row = advisory.to_dict()
            row["cves"] = " ".join(row["cves"])
            row["references"] = " ".join(row["references"])
            for column in ("affected_versions", "fixed_versions"):
                if isinstance(row[column], list):
                    row[column] = json.dumps(row[column])
            rows.append(row)
    return pd.DataFrame(rows, columns=ADVISORY_COLUMNS)


def export_advisories_csv(database: AdvisoryDatabase, output_dir: Path, name: str = "advisory_db") -> Path:
    output_dir.mkdir(parents=True, exist_ok=True)
    csv_file = output_dir / f"{name}_advisories.csv"
    advisories_dataframe(database).to_csv(csv_file, index=False)
    return csv_file


def export_worksheets(database: AdvisoryDatabase, output_dir: Path, name: str = "advisory_db") -> Path | None:
    df = advisories_dataframe(database)
    if df.empty:
        return None
    output_dir.mkdir(parents=True, exist_ok=True)
    excel_file = output_dir / f"{name}_worksheets.xlsx"
    with pd.ExcelWriter(excel_file, engine='openpyxl') as writer:
        for distribution, dist_df in df.groupby("distribution", sort=False):
            # Excel sheet names have a 31 character limit
            sheet_name = str(distribution)[:31]
            dist_df.to_excel(writer, sheet_name=sheet_name, index=False)
    return excel_file
