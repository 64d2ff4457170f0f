"""Loading of the per-continent country partitions shipped under ``data/``."""

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from pydantic import ValidationError

from country_atlas.config import settings
from country_atlas.errors import DatasetError
from country_atlas.models.country import Continent, Country

logger = logging.getLogger(__name__)

# Partition order is the dataset order every index and list result follows.
PARTITIONS: tuple[Continent, ...] = (
    Continent.ASIA,
    Continent.EUROPE,
    Continent.AFRICA,
    Continent.AMERICAS,
    Continent.OCEANIA,
    Continent.ANTARCTIC,
)


@dataclass(frozen=True)
class Dataset:
    countries: tuple[Country, ...]
    regions: dict[Continent, tuple[Country, ...]]

    def __len__(self) -> int:
        return len(self.countries)


def partition_path(data_dir: Path, continent: Continent) -> Path:
    return Path(data_dir) / f"{continent.value.lower()}.json"


def _read_flag_svg(data_dir: Path, alpha2: str) -> str:
    path = Path(data_dir) / "flags" / f"{alpha2.lower()}.svg"
    if path.is_file():
        return path.read_text(encoding="utf-8").strip()
    return ""


def _parse_record(raw: dict, data_dir: Path) -> Country:
    flag = dict(raw.get("flag") or {})
    if not flag.get("svg"):
        alpha2 = (raw.get("iso") or {}).get("alpha2") or ""
        flag["svg"] = _read_flag_svg(data_dir, alpha2) if alpha2 else ""
    return Country.model_validate({**raw, "flag": flag})


def load_dataset(data_dir: Path | str | None = None) -> Dataset:
    """Read and validate every continent partition in dataset order.

    Raises DatasetError when a partition is missing or unreadable, when a
    record fails validation, when a record sits in the wrong partition, or
    when an alpha-2 / alpha-3 code repeats.
    """
    data_dir = Path(data_dir) if data_dir is not None else settings.data_dir
    countries: list[Country] = []
    regions: dict[Continent, tuple[Country, ...]] = {}
    seen_alpha2: set[str] = set()
    seen_alpha3: set[str] = set()

    for continent in PARTITIONS:
        path = partition_path(data_dir, continent)
        try:
            raw_records = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError as e:
            raise DatasetError(f"Missing data partition: {path}") from e
        except json.JSONDecodeError as e:
            raise DatasetError(f"Malformed JSON in {path.name}: {e}") from e

        partition: list[Country] = []
        for raw in raw_records:
            try:
                country = _parse_record(raw, data_dir)
            except ValidationError as e:
                raise DatasetError(f"Invalid record in {path.name}: {e}") from e

            if country.geo.continent != continent:
                raise DatasetError(
                    f"{country.iso.alpha2} is listed under {continent.value} "
                    f"but declares continent {country.geo.continent.value}",
                    code=country.iso.alpha2,
                )
            if country.iso.alpha2 in seen_alpha2:
                raise DatasetError(
                    f"Duplicate alpha2 code: {country.iso.alpha2}", code=country.iso.alpha2
                )
            if country.iso.alpha3 in seen_alpha3:
                raise DatasetError(
                    f"Duplicate alpha3 code: {country.iso.alpha3}", code=country.iso.alpha3
                )
            seen_alpha2.add(country.iso.alpha2)
            seen_alpha3.add(country.iso.alpha3)
            partition.append(country)

        regions[continent] = tuple(partition)
        countries.extend(partition)
        logger.info("Loaded %d countries from %s", len(partition), path.name)

    return Dataset(countries=tuple(countries), regions=regions)
