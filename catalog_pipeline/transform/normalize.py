# catalog_pipeline/transform/normalize.py
import re
from datetime import date, datetime
from typing import Any, List, Optional, Tuple

import numpy as np
import pandas as pd

MOVIE = "Movie"
SERIES = "Series"
KIND_ALIASES: dict[str, str] = {
    "movie": MOVIE,
    "series": SERIES,
    "tv show": SERIES,
    "tv series": SERIES,
}

DATE_ADDED_FORMAT = "%B %d, %Y"  # z.B. "September 25, 2021"
MULTI_VALUE_DELIMITER = ","

RE_DURATION = re.compile(r"^\s*(\d+)\s+(min|seasons?)\s*$", re.IGNORECASE)
DURATION_UNIT_BY_KIND: dict[str, str] = {MOVIE: "min", SERIES: "season"}


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        # Listen o.ä. sind nie "fehlend"
        return False


def normalize_kind(value: Any) -> Optional[str]:
    """'Movie' / 'TV Show' / 'Series' -> 'Movie' | 'Series', sonst None."""
    if _is_missing(value):
        return None
    return KIND_ALIASES.get(str(value).strip().lower())


def split_tokens(value: Any, delimiter: str = MULTI_VALUE_DELIMITER) -> List[str]:
    """Zerlegt ein Mehrfachfeld in getrimmte, nicht-leere Tokens (Reihenfolge bleibt)."""
    if _is_missing(value):
        return []
    return [tok.strip() for tok in str(value).split(delimiter) if tok.strip()]


def explode_record(record: Any, field: str, delimiter: str = MULTI_VALUE_DELIMITER) -> List[Tuple[Any, str]]:
    """
    Fächert einen Datensatz über ein Mehrfachfeld auf: ein (record, token)-Paar
    pro Token. Der Datensatz selbst bleibt unverändert. Felder ohne Tokens
    (nur Trennzeichen / Leerzeichen) liefern keine Paare.
    """
    if isinstance(record, dict):
        raw = record.get(field)
    else:
        raw = getattr(record, field)
    return [(record, tok) for tok in split_tokens(raw, delimiter)]


def explode_frame(
    df: pd.DataFrame,
    field: str,
    token_column: str = "token",
    delimiter: str = MULTI_VALUE_DELIMITER,
) -> pd.DataFrame:
    """
    Vektorisierte Variante von explode_record: eine Zeile pro Token in
    `token_column`, alle anderen Spalten unverändert, Ladereihenfolge bleibt.
    """
    if df.empty:
        out = df.copy()
        out[token_column] = pd.Series(dtype="object")
        return out

    out = df.copy()
    out[token_column] = out[field].apply(lambda v: split_tokens(v, delimiter))
    # Datensätze ohne Tokens fallen aus dieser Explosion heraus
    out = out[out[token_column].map(len) > 0]
    out = out.explode(token_column)
    return out.reset_index(drop=True)


def has_token(df: pd.DataFrame, field: str, token: str, delimiter: str = MULTI_VALUE_DELIMITER) -> pd.Series:
    """Maske: Feld enthält `token` als eigenes Token (case-insensitive)."""
    wanted = token.strip().casefold()
    return df[field].apply(
        lambda v: any(tok.casefold() == wanted for tok in split_tokens(v, delimiter))
    ).astype(bool)


def contains_text(df: pd.DataFrame, field: str, needle: str) -> pd.Series:
    """Maske: freie Teilstring-Suche, case-insensitive, fehlende Werte -> False."""
    return df[field].astype("string").str.contains(needle, case=False, regex=False, na=False).astype(bool)


def parse_duration(value: Any) -> Optional[Tuple[int, str]]:
    """'90 min' -> (90, 'min'), '3 Seasons' -> (3, 'season'), sonst None."""
    if _is_missing(value):
        return None
    m = RE_DURATION.match(str(value))
    if not m:
        return None
    unit = "min" if m.group(2).lower() == "min" else "season"
    return int(m.group(1)), unit


def duration_amount(df: pd.DataFrame) -> pd.Series:
    """
    Numerischer Anteil von `duration` (Minuten bzw. Staffeln).

    NaN, wenn die Dauer nicht dem Muster "<int> <unit>" folgt oder die Einheit
    nicht zur Art passt (Movie -> min, Series -> Season(s)).
    """
    def _amount(row) -> float:
        parsed = parse_duration(row["duration"])
        if parsed is None:
            return np.nan
        amount, unit = parsed
        if DURATION_UNIT_BY_KIND.get(row["kind"]) != unit:
            return np.nan
        return float(amount)

    if df.empty:
        return pd.Series(dtype="float64", index=df.index)
    return df.apply(_amount, axis=1).astype("float64")


def parse_date_added(value: Any) -> Optional[date]:
    """Fehlertolerantes Parsen von date_added; None statt Exception."""
    if _is_missing(value):
        return None
    try:
        return datetime.strptime(str(value).strip(), DATE_ADDED_FORMAT).date()
    except ValueError:
        return None


def date_added_series(df: pd.DataFrame) -> pd.Series:
    """date_added als datetime64, NaT für fehlende/unparsebare Werte."""
    if df.empty:
        return pd.Series(dtype="datetime64[ns]", index=df.index)
    raw = df["date_added"].astype("string").str.strip()
    return pd.to_datetime(raw, format=DATE_ADDED_FORMAT, errors="coerce")
