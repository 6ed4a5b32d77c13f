from __future__ import annotations
from pathlib import Path
from typing import Dict, Iterable, List, Sequence

import polars as pl

from resas.core.schema import City, Prefecture

Row = List[str]

CITY_SCHEMA: Dict[str, pl.DataType] = {
    "prefecture_code": pl.Utf8,
    "prefecture_name": pl.Utf8,
    "city_code": pl.Utf8,
    "city_name": pl.Utf8,
    "big_city_flag_array": pl.Utf8,
}


class EmptyDatasetError(ValueError):
    pass


def city_rows(prefecture: Prefecture, cities: Iterable[City]) -> List[Row]:
    """One text row per city, paired with the name of its prefecture."""
    return [
        [str(c.pref_code), prefecture.pref_name, c.city_code, c.city_name, c.big_city_flag]
        for c in cities
    ]


def transpose(rows: Sequence[Row]) -> List[List[str]]:
    if not rows:
        raise EmptyDatasetError("Not found data for city results")
    width = len(rows[0])
    bad = [i for i, r in enumerate(rows) if len(r) != width]
    if bad:
        raise ValueError(f"Rows {bad} do not have {width} columns")
    return [[row[i] for row in rows] for i in range(width)]


def write_cities(rows: Sequence[Row], path: Path) -> Path:
    """
    Write city rows as a Parquet file with the fixed all-text schema.
    Parent directories are created; returns the written path.
    """
    columns = transpose(rows)
    if len(columns) != len(CITY_SCHEMA):
        raise ValueError(f"Expected {len(CITY_SCHEMA)} columns, got {len(columns)}")

    df = pl.DataFrame(dict(zip(CITY_SCHEMA, columns)), schema=CITY_SCHEMA)
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    df.write_parquet(path)
    return path
