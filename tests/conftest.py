import json
from pathlib import Path

import pytest

from country_atlas.limiter import limiter
from country_atlas.services import country_service

limiter.enabled = False

PARTITION_NAMES = ("asia", "europe", "africa", "americas", "oceania", "antarctic")


def make_record(alpha2, alpha3, name, continent="Asia", **extra):
    record = {
        "name": name,
        "officialName": extra.pop("officialName", f"Republic of {name}"),
        "iso": {"alpha2": alpha2, "alpha3": alpha3, "numeric": extra.pop("numeric", None)},
        "geo": {
            "latitude": extra.pop("latitude", 0.0),
            "longitude": extra.pop("longitude", 0.0),
            "region": extra.pop("region", ""),
            "continent": continent,
            "landlocked": extra.pop("landlocked", False),
            "areaKm2": extra.pop("areaKm2", 100),
            "borders": extra.pop("borders", []),
        },
        "unMember": extra.pop("unMember", True),
    }
    record.update(extra)
    return record


def write_dataset(data_dir: Path, partitions: dict[str, list[dict]]) -> Path:
    data_dir.mkdir(parents=True, exist_ok=True)
    for name in PARTITION_NAMES:
        records = partitions.get(name, [])
        (data_dir / f"{name}.json").write_text(
            json.dumps(records, ensure_ascii=False), encoding="utf-8"
        )
    return data_dir


@pytest.fixture
def custom_dataset(tmp_path):
    """Point the lookup service at a dataset written by the test, then restore it."""

    def _install(partitions: dict[str, list[dict]]):
        data_dir = write_dataset(tmp_path / "data", partitions)
        country_service.reset()
        country_service.init(data_dir)
        return data_dir

    yield _install
    country_service.reset()


@pytest.fixture
def india():
    return country_service.get_by_iso2("IN")
