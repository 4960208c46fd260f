"""
CLI entry point for Catalog Match.

Usage:
    python -m sourcing.catalog_match --catalog catalog.xlsx --requests bom.csv
    python -m sourcing.catalog_match --catalog catalog.csv --requests a.csv b.xlsx --output-csv report.csv
"""

import argparse
import logging
import sys
from pathlib import Path

from .config import DEFAULT_CONFIG_PATH, load_config
from .index import build_index
from .matcher import match_records
from .models import Catalog
from .report import build_report_rows, export_csv, format_console
from .sources import load_many, load_records


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="catalog_match",
        description="Catalog Match - Check a client's requested parts against a product catalog",
    )

    parser.add_argument(
        "--catalog",
        required=True,
        metavar="FILE",
        help="Catalog file (CSV, JSON or XLSX)",
    )

    parser.add_argument(
        "--requests",
        nargs="+",
        required=True,
        metavar="FILE",
        help="Client request files, concatenated in the given order",
    )

    parser.add_argument(
        "--config",
        default=None,
        metavar="FILE",
        help="Field config file (default: module's field_config.json)",
    )

    parser.add_argument(
        "--search",
        default="",
        metavar="QUERY",
        help="Only list found matches containing QUERY (implies --show-found)",
    )

    parser.add_argument(
        "--output-csv",
        metavar="FILE",
        help="Output CSV report path",
    )

    parser.add_argument(
        "--show-found",
        action="store_true",
        help="Include found matches in console output",
    )

    parser.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Suppress console output (only output CSV)",
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    config_path = Path(args.config) if args.config else DEFAULT_CONFIG_PATH
    if not config_path.exists():
        print(f"Error: Config file not found: {config_path}", file=sys.stderr)
        sys.exit(1)

    catalog_path = Path(args.catalog)
    if not catalog_path.exists():
        print(f"Error: Catalog file not found: {catalog_path}", file=sys.stderr)
        sys.exit(1)

    request_paths = []
    for pattern in args.requests:
        path = Path(pattern)
        if path.exists():
            request_paths.append(path)
        else:
            # Try glob expansion
            expanded = sorted(Path(".").glob(pattern))
            if expanded:
                request_paths.extend(expanded)
            else:
                print(f"Error: Request file not found: {pattern}", file=sys.stderr)
                sys.exit(1)

    try:
        config = load_config(config_path)

        if not args.quiet:
            print(f"Loading catalog {catalog_path.name}...")
        catalog = Catalog(id=catalog_path.stem, name=catalog_path.name, records=load_records(catalog_path))
        index = build_index(catalog.records, config)
        if not args.quiet:
            print(f"Indexed {len(index)} of {catalog.record_count} catalog records")
            if index.duplicate_identifiers:
                print(f"Warning: {len(index.duplicate_identifiers)} identifier(s) repeat in the catalog; "
                      f"the last row wins: {', '.join(index.duplicate_identifiers[:10])}")

        client_records = load_many(request_paths)
        if not client_records:
            print("Warning: No requested parts found in request files", file=sys.stderr)
            sys.exit(0)

        if not args.quiet:
            print(f"Matching {len(client_records)} requested parts...")

        result = match_records(index, client_records, config)

        if not args.quiet:
            report = format_console(
                client_records,
                result,
                config,
                show_found=args.show_found or bool(args.search),
                query=args.search,
            )
            print(report)

        if args.output_csv:
            output_path = Path(args.output_csv)
            rows = build_report_rows(client_records, result, config)
            with open(output_path, "w", newline="", encoding="utf-8") as f:
                export_csv(rows, output=f)
            if not args.quiet:
                print(f"\nCSV exported to: {output_path}")

    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
