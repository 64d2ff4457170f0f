"""Command line interface: ``atlas lookup india``, ``atlas region europe --json``."""

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

import httpx

from country_atlas import __version__
from country_atlas.config import settings
from country_atlas.errors import AtlasError
from country_atlas.models.country import Country
from country_atlas.services import country_service, ingest
from country_atlas.utils.formatters import format_area

logger = logging.getLogger(__name__)

TABLE_HEADERS = ("Flag", "Name", "ISO2", "Capital", "Region")


def _to_json(data) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)


def _print_details(country: Country) -> None:
    print(f"\n{country.flag.emoji}  {country.name.upper()}")
    print("=" * (len(country.name) + 4))
    print(f"Official Name : {country.official_name}")
    print(f"ISO Codes     : {country.iso.alpha2} / {country.iso.alpha3}")
    print(f"Capital       : {', '.join(country.capital) or 'N/A'}")
    print(f"Region        : {country.geo.region} ({country.geo.continent.value})")
    if country.currency:
        print(f"Currency      : {country.currency.name} ({country.currency.code})")
    else:
        print("Currency      : N/A")
    print(f"Calling Code  : {country.calling_code or 'N/A'}")
    print(f"Languages     : {', '.join(country.languages) or 'N/A'}")
    print(f"Area          : {format_area(country.geo.area_km2)}")
    if country.geo.borders:
        print(f"Borders       : {', '.join(country.geo.borders)}")
    print()


def _print_table(countries: Sequence[Country]) -> None:
    rows = [
        (
            c.flag.emoji,
            c.name,
            c.iso.alpha2,
            c.capital[0] if c.capital else "N/A",
            c.geo.region or "N/A",
        )
        for c in countries
    ]
    widths = [max(len(h), *(len(r[i]) for r in rows)) for i, h in enumerate(TABLE_HEADERS)]

    def fmt(row):
        return " | ".join(cell.ljust(widths[i]) for i, cell in enumerate(row))

    print(fmt(TABLE_HEADERS))
    print("-+-".join("-" * w for w in widths))
    for row in rows:
        print(fmt(row))
    print(f"\nTotal: {len(countries)} countries found.\n")


def _cmd_lookup(query: str, as_json: bool) -> int:
    country = country_service.lookup(query)
    if country is None:
        print(f"Country not found for query: {query}", file=sys.stderr)
        return 1
    if as_json:
        print(_to_json(country_service.project(country)))
    else:
        _print_details(country)
    return 0


def _cmd_list(command: str, query: str, as_json: bool) -> int:
    if command == "search":
        results = country_service.search(query)
    elif command == "region":
        results = country_service.get_by_continent(query)
    else:
        results = country_service.get_border_countries(query)

    if not results:
        print("No countries found.")
    elif as_json:
        print(_to_json([country_service.project(c) for c in results]))
    else:
        _print_table(results)
    return 0


def _cmd_refresh(output: Path | None, flags: bool) -> int:
    target = output or settings.data_dir
    try:
        counts = asyncio.run(ingest.refresh_dataset(target, flags=flags))
    except httpx.HTTPError as e:
        logger.exception("Dataset refresh failed")
        print(f"Error: download failed: {e}", file=sys.stderr)
        return 1
    country_service.reset()
    for continent, count in counts.items():
        print(f"Saved {continent.lower()}.json ({count} countries)")
    return 0


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--json", action="store_true", help="output result as JSON")

    parser = argparse.ArgumentParser(prog="atlas", description=f"Country Atlas CLI v{__version__}")
    parser.add_argument("--data-dir", type=Path, help="directory holding the continent JSON files")
    sub = parser.add_subparsers(dest="command")

    for name, help_text in (
        ("lookup", "get country details (ISO2/ISO3/name)"),
        ("search", "search countries by name or official name"),
        ("region", "list countries in a continent"),
        ("borders", "list countries bordering a country"),
    ):
        cmd = sub.add_parser(name, parents=[common], help=help_text)
        cmd.add_argument("query", nargs="*")

    sub.add_parser("version", help="show version")
    refresh = sub.add_parser("refresh", help="download and normalize the upstream dataset")
    refresh.add_argument("--output", type=Path, help="directory to write the partitions to")
    refresh.add_argument("--no-flags", action="store_true", help="skip downloading flag artwork")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")

    if args.command is None:
        parser.print_help()
        return 0
    if args.command == "version":
        print(f"v{__version__}")
        return 0
    if args.command == "refresh":
        return _cmd_refresh(args.output, not args.no_flags)

    query = " ".join(args.query).strip()
    if not query:
        what = "continent" if args.command == "region" else "query"
        print(f"Error: Please provide a {what}.", file=sys.stderr)
        return 1

    try:
        if args.data_dir is not None:
            country_service.reset()
            country_service.init(args.data_dir)
        if args.command == "lookup":
            return _cmd_lookup(query, args.json)
        return _cmd_list(args.command, query, args.json)
    except AtlasError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
