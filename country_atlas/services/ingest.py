"""Rebuild the continent partitions from the upstream mledoze/countries dataset."""

import json
import logging
from pathlib import Path

import httpx

from country_atlas.config import settings
from country_atlas.models.country import Continent
from country_atlas.services.dataset import PARTITIONS, partition_path

logger = logging.getLogger(__name__)

_CONTINENTS = {c.value for c in Continent}


async def fetch_raw_countries(
    url: str | None = None,
    timeout: float | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[dict]:
    async with httpx.AsyncClient(
        timeout=timeout or settings.http_timeout, transport=transport
    ) as client:
        resp = await client.get(url or settings.source_url, follow_redirects=True)
        resp.raise_for_status()
        return resp.json()


def _calling_code(idd: dict | None) -> str | None:
    idd = idd or {}
    root = idd.get("root") or ""
    if not root:
        return None
    suffixes = idd.get("suffixes") or []
    # Shared roots such as +1 list hundreds of area codes; keep the bare root.
    if len(suffixes) == 1:
        return root + suffixes[0]
    return root


def _utc_offset(tz: str) -> str:
    offset = tz.replace("UTC", "", 1)
    return offset or "+00:00"


def normalize_record(raw: dict) -> dict | None:
    """Map one upstream record onto the Country wire shape.

    Returns None for records whose region is not one of the six continents.
    """
    continent = raw.get("region") or ""
    if continent not in _CONTINENTS:
        logger.warning("Skipping %s: unknown continent %r", raw.get("cca2"), continent)
        return None

    name = raw.get("name") or {}
    latlng = raw.get("latlng") or []
    currencies = raw.get("currencies") or {}
    currency = None
    if currencies:
        code, info = next(iter(currencies.items()))
        currency = {"code": code, "name": info.get("name", ""), "symbol": info.get("symbol", "")}

    record = {
        "name": name.get("common", ""),
        "officialName": name.get("official", ""),
        "capital": raw.get("capital") or [],
        "iso": {
            "alpha2": raw.get("cca2", ""),
            "alpha3": raw.get("cca3", ""),
            "numeric": raw.get("ccn3") or None,
        },
        "geo": {
            "latitude": round(latlng[0], 4) if len(latlng) > 1 else None,
            "longitude": round(latlng[1], 4) if len(latlng) > 1 else None,
            "region": raw.get("subregion") or continent,
            "continent": continent,
            "landlocked": bool(raw.get("landlocked")),
            "areaKm2": raw.get("area") or 0,
            "borders": raw.get("borders") or [],
        },
        "nativeNames": name.get("native") or name.get("nativeName") or {},
        "languages": list((raw.get("languages") or {}).values()),
        "currency": currency,
        "callingCode": _calling_code(raw.get("idd")),
        "timezones": [
            {"name": tz, "utcOffset": _utc_offset(tz)} for tz in raw.get("timezones") or []
        ],
        "domains": {"tld": raw.get("tld") or []},
        "startOfWeek": raw.get("startOfWeek"),
        "unMember": bool(raw.get("unMember")),
    }
    if raw.get("flag"):
        record["flag"] = {"emoji": raw["flag"]}
    postal = raw.get("postalCode") or {}
    if postal.get("format"):
        record["postal"] = {"format": postal["format"], "regex": postal.get("regex") or ""}
    return record


def partition_records(raw_records: list[dict]) -> dict[str, list[dict]]:
    partitions: dict[str, list[dict]] = {c.value: [] for c in PARTITIONS}
    for raw in raw_records:
        record = normalize_record(raw)
        if record is not None:
            partitions[record["geo"]["continent"]].append(record)
    return partitions


def write_partitions(partitions: dict[str, list[dict]], data_dir: Path) -> dict[str, int]:
    data_dir = Path(data_dir)
    data_dir.mkdir(parents=True, exist_ok=True)
    counts = {}
    for continent in PARTITIONS:
        records = partitions.get(continent.value, [])
        path = partition_path(data_dir, continent)
        path.write_text(json.dumps(records, ensure_ascii=False, indent=2) + "\n", encoding="utf-8")
        counts[continent.value] = len(records)
        logger.info("Saved %s (%d countries)", path.name, len(records))
    return counts


async def fetch_flags(
    codes: list[str],
    data_dir: Path,
    base_url: str | None = None,
    timeout: float | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> int:
    """Download the 4x3 SVG artwork for each alpha-2 code into ``data_dir/flags``.

    A flag that cannot be fetched is logged and skipped so one missing file
    does not abort the refresh. Returns the number of flags saved.
    """
    flags_dir = Path(data_dir) / "flags"
    flags_dir.mkdir(parents=True, exist_ok=True)
    base_url = (base_url or settings.flags_url).rstrip("/")
    saved = 0
    async with httpx.AsyncClient(
        timeout=timeout or settings.http_timeout, transport=transport
    ) as client:
        for code in codes:
            code = code.lower()
            try:
                resp = await client.get(f"{base_url}/{code}.svg", follow_redirects=True)
                resp.raise_for_status()
            except httpx.HTTPError as e:
                logger.warning("Could not fetch flag for %s: %s", code, e)
                continue
            (flags_dir / f"{code}.svg").write_text(resp.text.strip() + "\n", encoding="utf-8")
            saved += 1
    logger.info("Saved %d of %d flags", saved, len(codes))
    return saved


async def refresh_dataset(
    data_dir: Path,
    url: str | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    flags: bool = True,
) -> dict[str, int]:
    raw_records = await fetch_raw_countries(url, transport=transport)
    logger.info("Fetched %d upstream records", len(raw_records))
    partitions = partition_records(raw_records)
    counts = write_partitions(partitions, data_dir)
    if flags:
        codes = [r["iso"]["alpha2"] for records in partitions.values() for r in records]
        await fetch_flags(codes, data_dir, transport=transport)
    return counts
