from __future__ import annotations
import logging
import time
from pathlib import Path
from typing import Callable, List

from resas.core.ports import CollectionClient
from resas.core.schema import City, Prefecture
from resas.storage.parquet_writer import Row, city_rows, write_cities

logger = logging.getLogger(__name__)

RESAS_PATH_PREFECTURE = "api/v1/prefectures"
RESAS_PATH_CITY = "api/v1/cities"
INTERVAL_MILLIS = 200


def fetch_city_rows(
    client: CollectionClient,
    *,
    interval_millis: int = INTERVAL_MILLIS,
    echo: Callable[[str], None] = print,
) -> List[Row]:
    prefectures = client.get(RESAS_PATH_PREFECTURE, Prefecture, with_retry=True).result
    logger.info("Fetched %d prefectures", len(prefectures))

    rows: List[Row] = []
    for pref in prefectures:
        # pacing between calls is ours, not the client's
        time.sleep(interval_millis / 1000)
        cities = client.get(
            RESAS_PATH_CITY, City, parameters=f"prefCode={pref.pref_code}", with_retry=True,
        ).result
        echo(f"Fetched prefecture: {pref.pref_name}")
        rows.extend(city_rows(pref, cities))
    return rows


def download(
    client: CollectionClient,
    output_path: Path,
    *,
    interval_millis: int = INTERVAL_MILLIS,
    echo: Callable[[str], None] = print,
) -> Path:
    """
    Fetch every prefecture and its cities, then write one Parquet file.
    Any error aborts the run before anything is written.
    """
    rows = fetch_city_rows(client, interval_millis=interval_millis, echo=echo)
    path = write_cities(rows, Path(output_path))
    echo(f"Saved to {path}")
    return path
