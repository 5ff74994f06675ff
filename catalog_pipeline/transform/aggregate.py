# catalog_pipeline/transform/aggregate.py

import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Callable, Hashable, List, Tuple, Union

import numpy as np
import pandas as pd

KeySpec = Union[str, Callable[[pd.DataFrame], pd.Series]]


def _key_series(items: pd.DataFrame, key: KeySpec) -> pd.Series:
    """Spaltenname oder Callable(df) -> Serie, ausgerichtet auf items.index."""
    if callable(key):
        values = key(items)
        if not isinstance(values, pd.Series):
            values = pd.Series(values, index=items.index)
        return values
    return items[key]


def round_half_up(value: float | Decimal, digits: int = 2) -> float:
    """Kaufmännisches Runden (0.125 -> 0.13), nicht Banker's Rounding wie round()."""
    quant = Decimal(1).scaleb(-digits)
    return float(Decimal(str(value)).quantize(quant, rounding=ROUND_HALF_UP))


def group_count(
    items: pd.DataFrame,
    key: KeySpec,
    sort_desc: bool = False,
    top_n: int | None = None,
) -> pd.Series:
    """
    Zählt Beiträge pro Schlüssel.

    Reihenfolge: erstes Auftreten des Schlüssels. Mit `sort_desc` stabil nach
    Anzahl absteigend sortiert, Gleichstände behalten die Reihenfolge des
    ersten Auftretens. Zeilen ohne Schlüssel (NaN/None) zählen nicht.
    """
    keys = _key_series(items, key)
    counts = keys.groupby(keys, sort=False, dropna=True).size()
    counts.name = "count"
    if sort_desc:
        counts = counts.sort_values(ascending=False, kind="stable")
    if top_n is not None:
        counts = counts.head(max(int(top_n), 0))
    logging.debug(f"group_count: {len(items)} Einträge -> {len(counts)} Gruppen")
    return counts.astype("int64")


def top_n_per_partition(
    items: pd.DataFrame,
    partition: KeySpec,
    key: KeySpec,
    n: int,
) -> dict[Hashable, List[Tuple[Any, int]]]:
    """
    Top-N Schlüssel je Partition, nach Anzahl absteigend.

    Anders als RANK() ist die Reihenfolge bei Gleichstand festgelegt: es
    gewinnt der Schlüssel, der innerhalb der Partition zuerst aufgetreten ist.
    Partitionen erscheinen in der Reihenfolge ihres ersten Auftretens.
    """
    frame = pd.DataFrame(
        {"partition": _key_series(items, partition), "key": _key_series(items, key)}
    ).dropna()

    result: dict[Hashable, List[Tuple[Any, int]]] = {}
    if frame.empty:
        return result

    counts = frame.groupby(["partition", "key"], sort=False).size()
    for part_value, sub in counts.groupby(level="partition", sort=False):
        ranked = (
            sub.droplevel("partition")
            .sort_values(ascending=False, kind="stable")
            .head(max(int(n), 0))
        )
        result[part_value] = [(k, int(c)) for k, c in ranked.items()]
    return result


def percentage_by_group(
    items: pd.DataFrame,
    key: KeySpec,
    denominator: Callable[[pd.DataFrame], pd.Series] | None = None,
) -> pd.Series:
    """
    Anteil pro Schlüssel in Prozent: 100 * count(key) / count(denominator).

    Ohne `denominator` zählen alle items. Bei Nenner 0 ist jeder Anteil 0.0,
    ein leeres items liefert eine leere Serie.
    """
    counts = group_count(items, key)
    if denominator is None:
        denom = len(items)
    else:
        denom = int(np.asarray(denominator(items), dtype=bool).sum())

    if denom == 0:
        if not counts.empty:
            logging.warning("percentage_by_group: Nenner ist 0, alle Anteile werden auf 0.0 gesetzt.")
        return pd.Series(0.0, index=counts.index, name="percentage", dtype="float64")

    shares = counts.map(
        lambda c: round_half_up(Decimal(100) * Decimal(int(c)) / Decimal(denom))
    )
    shares.name = "percentage"
    return shares.astype("float64")


def longest_by_metric(items: pd.DataFrame, metric: KeySpec) -> pd.DataFrame:
    """Alle Zeilen, deren Metrik dem Maximum entspricht (Gleichstände inklusive)."""
    values = pd.to_numeric(_key_series(items, metric), errors="coerce")
    valid = values.dropna()
    if valid.empty:
        return items.iloc[0:0].copy()
    return items[values == valid.max()].copy()
