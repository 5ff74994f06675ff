import logging
from typing import List, Tuple
from datetime import datetime
import pandas as pd
from pathlib import Path

from catalog_pipeline.transform.normalize import (
    MOVIE,
    SERIES,
    date_added_series,
    duration_amount,
)

CURRENT_YEAR: int = datetime.now().year
YEAR_MIN: int = 1888
YEAR_MAX: int = CURRENT_YEAR + 1
REQUIRED_BASE_COLS: List[str] = [
    "identifier", "kind", "title"
]
RECORD_COLUMNS: List[str] = [
    "identifier", "kind", "title", "director", "cast", "countries",
    "date_added", "release_year", "rating", "duration", "genres",
    "description",
]
VALID_KINDS = {MOVIE, SERIES}


def validate_catalog_frame(
    df: pd.DataFrame,
    *,
    required_cols: List[str] | None = None,
    allow_empty: bool = False,
    df_name: str | None = None,
    log_level: int = logging.WARNING,
    error_report_path: str | None = None,
) -> Tuple[bool, List[str]]:
    """
    Prüft einen Katalog-DataFrame gegen das Record-Schema.

    Harte Fehler (-> ok=False): leerer DataFrame, fehlende Pflichtspalten,
    unbekannte Art, doppelte identifier, ungültiges release_year.
    Unpassende Dauer und unparsebares date_added werden nur gemeldet
    (Hinweise), da solche Zeilen lediglich aus den betroffenen Reports fallen.
    """
    name = df_name or "DataFrame"
    errors: List[str] = []
    notes: List[str] = []

    # 0) Leerer DataFrame
    if df.empty and not allow_empty:
        errors.append(f"{name} ist leer.")

    # 1) Pflichtspalten prüfen
    req_cols = set(REQUIRED_BASE_COLS + (required_cols or []))
    missing = req_cols.difference(df.columns)
    if missing:
        errors.append(f"{name}: fehlende Spalten: {', '.join(sorted(missing))}")

    # 2) Art (Movie / Series)
    if "kind" in df.columns:
        bad_kind = ~df["kind"].isin(VALID_KINDS)
        if bad_kind.any():
            errors.append(
                f"{name}: {int(bad_kind.sum())} Zeilen mit unbekannter Art (erlaubt: {', '.join(sorted(VALID_KINDS))})."
            )

    # 3) identifier eindeutig
    if "identifier" in df.columns:
        dupes = df["identifier"].duplicated(keep=False)
        if dupes.any():
            errors.append(
                f"{name}: {int(dupes.sum())} Zeilen teilen sich einen identifier.")

    # 4) release_year
    if "release_year" in df.columns:
        years = pd.to_numeric(df["release_year"], errors="coerce")
        invalid_year_mask = ~years.between(YEAR_MIN, YEAR_MAX) & years.notna()
        if invalid_year_mask.any():
            errors.append(
                f"{name}: {int(invalid_year_mask.sum())} Zeilen mit ungültigem Jahr (<{YEAR_MIN} oder >{YEAR_MAX}) in 'release_year'."
            )

    # 5) Hinweise: Dauer / Datum
    if {"duration", "kind"}.issubset(df.columns) and not df.empty:
        n_bad_duration = int(duration_amount(df).isna().sum())
        if n_bad_duration:
            notes.append(
                f"{name}: {n_bad_duration} Zeilen mit fehlender oder zur Art unpassender Dauer (fallen aus Dauer-Reports)."
            )
    if "date_added" in df.columns and not df.empty:
        n_bad_date = int(date_added_series(df).isna().sum())
        if n_bad_date:
            notes.append(
                f"{name}: {n_bad_date} Zeilen ohne parsebares date_added (fallen aus Datums-Reports)."
            )

    for msg in errors:
        logging.log(log_level, msg)
    for msg in notes:
        logging.info(msg)

    # --- Fehlerreport speichern ---
    if error_report_path and (errors or notes):
        try:
            rep_path = Path(error_report_path)
            rep_path.parent.mkdir(parents=True, exist_ok=True)
            rep_path.write_text("\n".join(errors + notes), encoding="utf-8")
            logging.info(f"{name}: Fehlerreport gespeichert unter {rep_path}")
        except OSError as e:
            logging.error(
                f"{name}: Fehler beim Speichern des Fehlerreports: {e}")

    return len(errors) == 0, errors


def validate_or_raise(
    df: pd.DataFrame,
    **kwargs,
) -> None:
    ok, errs = validate_catalog_frame(df, **kwargs)
    if not ok:
        joined = "\n - ".join(errs)
        raise ValueError(f"Validation Fehler:\n - {joined}")
