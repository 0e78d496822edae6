"""
Command-line interface for building and querying the advisory database.
"""

import argparse
import logging
import sys
from pathlib import Path

from .builder import AdvisoryDatabase, DatabaseBuilder
from .config import BuildConfig
from .exceptions import UnknownDistribution, UnknownModule
from .matcher import find_vulnerabilities, find_vulnerabilities_by_module
from .release_history import DEFAULT_METACPAN_URL
from .reporting import export_advisories_csv, export_worksheets, print_summary, save_database_json


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Build a security advisory database and check installed versions against it"
    )

    parser.add_argument(
        "--advisories-dir",
        required=True,
        help="Directory of advisory YAML files"
    )

    parser.add_argument(
        "--packages-file",
        default=None,
        help="Package index snapshot (02packages.details.txt, optionally .gz) used to map modules to distributions"
    )

    parser.add_argument(
        "--fetch-releases",
        action="store_true",
        help="Enrich distributions with release history from MetaCPAN"
    )

    parser.add_argument(
        "--metacpan-url",
        default=DEFAULT_METACPAN_URL,
        help=f"MetaCPAN API base URL. Default: {DEFAULT_METACPAN_URL}"
    )

    parser.add_argument(
        "--output-dir",
        default="./output",
        help="Output directory for results. Default: ./output"
    )

    parser.add_argument(
        "--get-csv",
        action="store_true",
        help="Export a flat CSV with one row per advisory"
    )

    parser.add_argument(
        "--get-worksheets",
        action="store_true",
        help="Export advisories to an Excel file with one sheet per distribution"
    )

    parser.add_argument(
        "--check",
        nargs=2,
        metavar=("NAME", "VERSION"),
        default=None,
        help="Report advisories affecting VERSION of NAME (a distribution or module name)"
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging"
    )
    return parser


def run_check(database: AdvisoryDatabase, name: str, version: str) -> int:
    try:
        advisories = find_vulnerabilities(database.ledger, name, version)
    except UnknownDistribution:
        try:
            advisories = find_vulnerabilities_by_module(
                database.module_index, database.ledger, name, version
            )
        except (UnknownModule, UnknownDistribution) as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

    if not advisories:
        print(f"{name} {version}: no known vulnerabilities")
        return 0

    print(f"{name} {version}: {len(advisories)} advisories")
    for advisory in advisories:
        cves = ", ".join(advisory.cves) or "no CVE"
        print(f"  {advisory.id} ({cves}) affected: {str(advisory.affected_versions) or '*'}")
    return 0


def main(argv=None):
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = BuildConfig(
        advisories_dir=Path(args.advisories_dir),
        packages_file=Path(args.packages_file) if args.packages_file else None,
        output_dir=Path(args.output_dir),
        fetch_releases=args.fetch_releases,
        metacpan_url=args.metacpan_url,
    )

    try:
        database = DatabaseBuilder(config).build()
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print_summary(database)

    database_file = save_database_json(database, config.output_dir)
    print(f"Database saved to: {database_file}")

    if args.get_csv:
        csv_file = export_advisories_csv(database, config.output_dir)
        print(f"Advisories saved to: {csv_file}")

    if args.get_worksheets:
        excel_file = export_worksheets(database, config.output_dir)
        if excel_file is not None:
            print(f"Worksheets saved to: {excel_file}")

    if args.check:
        name, version = args.check
        status = run_check(database, name, version)
        if status:
            sys.exit(status)


if __name__ == "__main__":
    main()
