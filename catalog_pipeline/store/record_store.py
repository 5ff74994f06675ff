# catalog_pipeline/store/record_store.py
import logging
from dataclasses import asdict, dataclass, fields
from typing import Any, Callable, Iterable, Iterator, Mapping, Optional

import pandas as pd

from catalog_pipeline.transform.normalize import normalize_kind
from catalog_pipeline.utils.basic_validator import RECORD_COLUMNS


@dataclass(frozen=True)
class MediaRecord:
    """Ein Katalogeintrag. Mehrfachfelder bleiben als Originaltext erhalten."""
    identifier: str
    kind: str
    title: str
    director: Optional[str] = None  # None = kein Regisseur, "" bleibt ""
    cast: Optional[str] = None
    countries: Optional[str] = None
    date_added: Optional[str] = None
    release_year: Optional[int] = None
    rating: Optional[str] = None
    duration: Optional[str] = None
    genres: Optional[str] = None
    description: Optional[str] = None


def _none_if_missing(value: Any) -> Any:
    if value is None:
        return None
    try:
        if pd.isna(value):
            return None
    except (TypeError, ValueError):
        pass
    return value


class RecordStore:
    """
    In-Memory-Snapshot des Katalogs (spaltenweise als DataFrame).

    `load` ersetzt den Snapshot komplett; danach wird nur noch gelesen.
    Laufende Scans sehen weiterhin den Snapshot, mit dem sie gestartet wurden.
    """

    def __init__(self, records: Iterable[Any] | pd.DataFrame | None = None):
        self.logger = logging.getLogger(__name__)
        self._df: pd.DataFrame = pd.DataFrame(columns=RECORD_COLUMNS)
        self.rejected: pd.DataFrame = pd.DataFrame(columns=RECORD_COLUMNS + ["reason"])
        if records is not None:
            self.load(records)

    # ------------------------------------------------------------ #
    # Laden                                                        #
    # ------------------------------------------------------------ #
    @staticmethod
    def _to_frame(records: Iterable[Any] | pd.DataFrame) -> pd.DataFrame:
        if isinstance(records, pd.DataFrame):
            df = records.copy()
        else:
            rows = []
            for item in records:
                if isinstance(item, MediaRecord):
                    rows.append(asdict(item))
                elif isinstance(item, Mapping):
                    rows.append(dict(item))
                else:
                    raise TypeError(
                        f"Nicht unterstützter Datensatztyp: {type(item).__name__}")
            df = pd.DataFrame(rows)

        for col in RECORD_COLUMNS:
            if col not in df.columns:
                df[col] = None
        return df[RECORD_COLUMNS].astype(object)

    def load(self, records: Iterable[Any] | pd.DataFrame) -> int:
        """Ersetzt den Snapshot. Ungültige Zeilen und doppelte identifier fallen heraus."""
        df = self._to_frame(records)
        df["kind"] = df["kind"].map(normalize_kind)
        df["release_year"] = pd.to_numeric(df["release_year"], errors="coerce").astype("Int64")

        invalid_mask = df["kind"].isna() | df["identifier"].isna() | df["title"].isna()
        # ungültige Zeilen zählen nicht als erstes Vorkommen eines identifiers
        dupes_mask = df["identifier"].where(~invalid_mask).duplicated(keep="first") & ~invalid_mask

        rejected_parts = []
        if invalid_mask.any():
            self.logger.warning(
                f"{int(invalid_mask.sum())} Datensätze ohne gültige Art, identifier oder Titel verworfen.")
            rejected_parts.append(df[invalid_mask].assign(reason="invalid record"))
        if dupes_mask.any():
            self.logger.warning(
                f"{int(dupes_mask.sum())} Duplikate (identifier) entfernt, erster Eintrag bleibt.")
            rejected_parts.append(df[dupes_mask].assign(reason="duplicate identifier"))

        self.rejected = (
            pd.concat(rejected_parts, ignore_index=True) if rejected_parts
            else pd.DataFrame(columns=RECORD_COLUMNS + ["reason"])
        )
        self._df = df[~(invalid_mask | dupes_mask)].reset_index(drop=True)
        self.logger.info(f"RecordStore geladen: {len(self._df)} Datensätze.")
        return len(self._df)

    # ------------------------------------------------------------ #
    # Lesen                                                        #
    # ------------------------------------------------------------ #
    def scan(self) -> Iterator[MediaRecord]:
        """Neuer Generator über alle Datensätze in Ladereihenfolge."""
        snapshot = self._df
        names = [f.name for f in fields(MediaRecord)]
        for row in snapshot.itertuples(index=False):
            values = {name: _none_if_missing(getattr(row, name)) for name in names}
            if values["release_year"] is not None:
                values["release_year"] = int(values["release_year"])
            yield MediaRecord(**values)

    def filter(self, predicate: Callable[[MediaRecord], bool]) -> Iterator[MediaRecord]:
        return (record for record in self.scan() if predicate(record))

    def frame(self) -> pd.DataFrame:
        """Kopie des spaltenweisen Snapshots für vektorisierte Auswertungen."""
        return self._df.copy()

    def is_empty(self) -> bool:
        return self._df.empty

    def __len__(self) -> int:
        return len(self._df)
