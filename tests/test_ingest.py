import asyncio
import json

import httpx
import pytest

from country_atlas.services import ingest
from country_atlas.services.dataset import load_dataset

RAW_INDIA = {
    "name": {
        "common": "India",
        "official": "Republic of India",
        "native": {
            "eng": {"official": "Republic of India", "common": "India"},
            "hin": {"official": "भारत गणराज्य", "common": "भारत"},
        },
    },
    "tld": [".in"],
    "cca2": "IN",
    "ccn3": "356",
    "cca3": "IND",
    "unMember": True,
    "currencies": {"INR": {"name": "Indian rupee", "symbol": "₹"}},
    "idd": {"root": "+9", "suffixes": ["1"]},
    "capital": ["New Delhi"],
    "region": "Asia",
    "subregion": "Southern Asia",
    "languages": {"eng": "English", "hin": "Hindi"},
    "latlng": [20.0, 77.0],
    "landlocked": False,
    "borders": ["BGD", "PAK"],
    "area": 3287590,
    "flag": "🇮🇳",
    "timezones": ["UTC+05:30"],
    "postalCode": {"format": "######", "regex": "^(\\d{6})$"},
    "startOfWeek": "monday",
}

RAW_USA = {
    "name": {"common": "United States", "official": "United States of America"},
    "cca2": "US",
    "cca3": "USA",
    "ccn3": "840",
    "currencies": {"USD": {"name": "United States dollar", "symbol": "$"}},
    "idd": {"root": "+1", "suffixes": ["201", "202", "203"]},
    "region": "Americas",
    "subregion": "North America",
    "latlng": [38.0, -97.0],
    "area": 9372610,
    "timezones": ["UTC-05:00", "UTC"],
}

RAW_ANTARCTICA = {
    "name": {"common": "Antarctica", "official": "Antarctica"},
    "cca2": "AQ",
    "cca3": "ATA",
    "region": "Antarctic",
    "latlng": [-90.0, 0.0],
    "area": 14000000,
    "idd": {},
}

RAW_UNKNOWN = {"name": {"common": "Nowhere", "official": "Nowhere"}, "cca2": "NW", "region": "Atlantis"}


def test_normalize_record():
    record = ingest.normalize_record(RAW_INDIA)
    assert record["name"] == "India"
    assert record["iso"] == {"alpha2": "IN", "alpha3": "IND", "numeric": "356"}
    assert record["geo"]["region"] == "Southern Asia"
    assert record["geo"]["continent"] == "Asia"
    assert record["geo"]["areaKm2"] == 3287590
    assert record["nativeNames"]["hin"]["common"] == "भारत"
    assert record["currency"] == {"code": "INR", "name": "Indian rupee", "symbol": "₹"}
    assert record["callingCode"] == "+91"
    assert record["timezones"] == [{"name": "UTC+05:30", "utcOffset": "+05:30"}]
    assert record["flag"] == {"emoji": "🇮🇳"}
    assert record["postal"]["format"] == "######"


def test_shared_root_keeps_bare_calling_code():
    record = ingest.normalize_record(RAW_USA)
    assert record["callingCode"] == "+1"
    assert record["timezones"][1] == {"name": "UTC", "utcOffset": "+00:00"}
    assert "postal" not in record


def test_sparse_record():
    record = ingest.normalize_record(RAW_ANTARCTICA)
    assert record["callingCode"] is None
    assert record["currency"] is None
    assert record["geo"]["region"] == "Antarctic"
    assert record["capital"] == []


def test_unknown_continent_is_skipped(caplog):
    with caplog.at_level("WARNING"):
        assert ingest.normalize_record(RAW_UNKNOWN) is None
    assert "unknown continent" in caplog.text


def test_partition_records():
    partitions = ingest.partition_records([RAW_USA, RAW_INDIA, RAW_UNKNOWN, RAW_ANTARCTICA])
    assert list(partitions) == ["Asia", "Europe", "Africa", "Americas", "Oceania", "Antarctic"]
    assert [r["name"] for r in partitions["Asia"]] == ["India"]
    assert [r["name"] for r in partitions["Americas"]] == ["United States"]
    assert partitions["Europe"] == []


def test_written_partitions_load_back(tmp_path):
    partitions = ingest.partition_records([RAW_INDIA, RAW_USA, RAW_ANTARCTICA])
    counts = ingest.write_partitions(partitions, tmp_path)
    assert counts == {
        "Asia": 1, "Europe": 0, "Africa": 0, "Americas": 1, "Oceania": 0, "Antarctic": 1,
    }
    assert json.loads((tmp_path / "europe.json").read_text(encoding="utf-8")) == []

    dataset = load_dataset(tmp_path)
    assert [c.iso.alpha2 for c in dataset.countries] == ["IN", "US", "AQ"]
    assert dataset.countries[1].flag.emoji == "🇺🇸"


FLAG_SVG = '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 640 480"></svg>'


def test_refresh_dataset_downloads_and_writes(tmp_path):
    requested = []

    def handler(request: httpx.Request) -> httpx.Response:
        requested.append(str(request.url))
        if request.url.path.endswith(".svg"):
            return httpx.Response(200, text=FLAG_SVG)
        return httpx.Response(200, json=[RAW_INDIA, RAW_UNKNOWN])

    counts = asyncio.run(
        ingest.refresh_dataset(
            tmp_path, url="https://example.test/countries.json",
            transport=httpx.MockTransport(handler),
        )
    )
    assert requested == [
        "https://example.test/countries.json",
        "https://raw.githubusercontent.com/lipis/flag-icons/main/flags/4x3/in.svg",
    ]
    assert counts["Asia"] == 1
    india = load_dataset(tmp_path).countries[0]
    assert india.name == "India"
    assert india.flag.svg == FLAG_SVG


def test_refresh_dataset_can_skip_flags(tmp_path):
    requested = []

    def handler(request: httpx.Request) -> httpx.Response:
        requested.append(request.url.path)
        return httpx.Response(200, json=[RAW_INDIA])

    asyncio.run(
        ingest.refresh_dataset(
            tmp_path, url="https://example.test/countries.json",
            transport=httpx.MockTransport(handler), flags=False,
        )
    )
    assert requested == ["/countries.json"]
    assert not (tmp_path / "flags").exists()


def test_fetch_flags_skips_missing_artwork(tmp_path, caplog):
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/flags/xk.svg":
            return httpx.Response(404)
        return httpx.Response(200, text=FLAG_SVG + "\n\n")

    with caplog.at_level("WARNING"):
        saved = asyncio.run(
            ingest.fetch_flags(
                ["IN", "XK", "FR"], tmp_path, base_url="https://example.test/flags/",
                transport=httpx.MockTransport(handler),
            )
        )
    assert saved == 2
    assert sorted(p.name for p in (tmp_path / "flags").iterdir()) == ["fr.svg", "in.svg"]
    assert (tmp_path / "flags" / "in.svg").read_text(encoding="utf-8") == FLAG_SVG + "\n"
    assert "Could not fetch flag for xk" in caplog.text


def test_refresh_dataset_propagates_http_errors(tmp_path):
    transport = httpx.MockTransport(lambda request: httpx.Response(503))
    with pytest.raises(httpx.HTTPStatusError):
        asyncio.run(ingest.refresh_dataset(tmp_path, url="https://example.test/x", transport=transport))
    assert not (tmp_path / "asia.json").exists()
