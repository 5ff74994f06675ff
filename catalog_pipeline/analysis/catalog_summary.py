# catalog_pipeline/analysis/catalog_summary.py
import logging
from pathlib import Path

import pandas as pd

from catalog_pipeline.transform.normalize import (
    date_added_series,
    duration_amount,
    split_tokens,
)


def build_catalog_summary(df: pd.DataFrame) -> list[str]:
    """Datenqualitäts-Übersicht des geladenen Katalogs als Textzeilen."""
    report_lines = []
    report_lines.append("======================================")
    report_lines.append("        Katalog-Übersicht        ")
    report_lines.append("======================================")
    report_lines.append(f"Datum der Analyse: {pd.Timestamp.now().strftime('%Y-%m-%d %H:%M:%S')}\n")

    report_lines.append("--- Allgemeine Statistiken ---")
    report_lines.append(f"Gesamtzahl der Einträge: {len(df)}")
    if df.empty:
        report_lines.append("Katalog ist leer – keine weiteren Statistiken.")
        return report_lines

    for kind, n in df["kind"].value_counts(sort=False).items():
        report_lines.append(f"  - {kind}: {n}")

    report_lines.append("\n--- Fehlende / fehlerhafte Felder ---")
    report_lines.append(f"Ohne Regisseur (fehlend): {int(df['director'].isna().sum())}")
    report_lines.append(
        f"Regisseur als leerer String: {int((df['director'].astype('string').str.len() == 0).fillna(False).sum())}"
    )
    report_lines.append(
        f"date_added fehlend oder nicht parsebar: {int(date_added_series(df).isna().sum())} (von {len(df)})"
    )
    amounts = duration_amount(df)
    for kind in df["kind"].dropna().unique():
        bad = int(amounts[df["kind"] == kind].isna().sum())
        report_lines.append(f"Dauer fehlerhaft/unpassend bei {kind}: {bad}")

    for col in ["countries", "genres", "cast"]:
        n_empty = int(df[col].apply(lambda v: len(split_tokens(v)) == 0).sum())
        report_lines.append(f"Ohne Werte in '{col}': {n_empty} (von {len(df)})")

    report_lines.append("\n--- Details zu allen Spalten ---")
    for col in df.columns:
        non_na_count = df[col].notna().sum()
        report_lines.append(f"  - Spalte '{col}' (Typ: {df[col].dtype}): {non_na_count} nicht-fehlende Werte (von {len(df)})")
    return report_lines


def write_catalog_summary(df: pd.DataFrame, report_path: Path) -> Path | None:
    report_lines = build_catalog_summary(df)
    try:
        report_path.parent.mkdir(parents=True, exist_ok=True)
        with open(report_path, "w", encoding="utf-8") as f:
            for line in report_lines:
                f.write(line + "\n")
        logging.info(f"Katalog-Übersicht gespeichert unter: {report_path}")
        return report_path
    except OSError as e:
        logging.error(f"Fehler beim Speichern der Katalog-Übersicht: {e}")
        return None
