# catalog_pipeline/adapters/netflix_adapter.py
from typing import List

import pandas as pd

from catalog_pipeline.adapters.base_adapter import BaseAdapter
from catalog_pipeline.transform.normalize import normalize_kind
from catalog_pipeline.utils.basic_validator import RECORD_COLUMNS

# Rohspalten des Netflix-Exports -> Record-Schema
COLUMN_MAP: dict[str, str] = {
    "show_id": "identifier",
    "type": "kind",
    "casts": "cast",  # in der SQL-Tabelle umbenannt, da 'cast' reserviert ist
    "country": "countries",
    "listed_in": "genres",
}


class NetflixAdapter(BaseAdapter):
    """Netflix-Katalog (CSV, 12 Spalten) -> Record-Schema.

    • identifier       str, eindeutig (show_id)
    • kind             'Movie' | 'Series' ('TV Show' -> 'Series')
    • release_year     Int64
    • director, cast, countries, rating, duration, genres, description:
      Text, fehlende Werte bleiben NaN (≠ leerer String)
    • date_added       Text, wird erst in den Reports geparst
    """

    # ------------------------------------------------------------ #
    # 1) Extract                                                   #
    # ------------------------------------------------------------ #
    def extract(self) -> pd.DataFrame:  # type: ignore[override]
        return pd.read_csv(
            self.config["file_path"],
            dtype=str,
            on_bad_lines="skip",
            encoding=self.config.get("encoding", "utf-8"),
        )

    # ------------------------------------------------------------ #
    # 2) Transform + Validate                                      #
    # ------------------------------------------------------------ #
    def transform(self, df: pd.DataFrame) -> pd.DataFrame:  # type: ignore[override]
        df = df.rename(columns=COLUMN_MAP).copy()
        for col in RECORD_COLUMNS:
            if col not in df.columns:
                df[col] = pd.NA

        df["identifier"] = df["identifier"].astype("string").str.strip()
        df["kind"] = df["kind"].map(normalize_kind)
        df["release_year"] = pd.to_numeric(df["release_year"], errors="coerce").astype("Int64")

        invalid_rows: List[dict] = []
        duplicate_rows: List[dict] = []
        seen_ids = set()
        cleaned_rows = []

        for _, row in df[RECORD_COLUMNS].iterrows():
            record = row.to_dict()
            reason = None

            # 1) identifier + Titel
            identifier = record["identifier"]
            if pd.isna(identifier) or not str(identifier):
                reason = "missing identifier"
            title = record["title"]
            if pd.isna(title) or not str(title).strip():
                reason = reason or "empty title"

            # 2) Art
            if pd.isna(record["kind"]):
                reason = reason or "unknown type"

            # 3) Duplikate (identifier)
            if reason is None and identifier in seen_ids:
                duplicate_rows.append({**record, "reason": "duplicate identifier"})
                continue

            if reason:
                invalid_rows.append({**record, "reason": reason})
            else:
                seen_ids.add(identifier)
                cleaned_rows.append(record)

        # ---------- CSV-Logging (zentraler Pfad) --------------------
        self._log_aux_files("NetflixAdapter", invalid_rows, duplicate_rows)

        # ---------- Ergebnis-DataFrame -----------------------------
        result = pd.DataFrame(cleaned_rows, columns=RECORD_COLUMNS)
        result["release_year"] = result["release_year"].astype("Int64")
        return result
