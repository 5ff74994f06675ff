# catalog_pipeline/analysis/report_plots.py
import logging
from pathlib import Path

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import pandas as pd
import seaborn as sns

# --- Globale Stil-Einstellung für Plots ---
plt.style.use('seaborn-v0_8-whitegrid')


def plot_report_counts(result: pd.DataFrame, output_dir: Path, report_id: str) -> Path | None:
    """
    Balkendiagramm für ein Schlüssel/Wert-Ergebnis (erste Spalte = Kategorie,
    zweite Spalte = Anzahl bzw. Anteil). Gibt den Pfad der PNG zurück.
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    if result is None or result.empty or len(result.columns) < 2:
        logging.info(f"Keine Daten für Plot von Report '{report_id}'.")
        return None

    label_col, value_col = result.columns[0], result.columns[1]
    plot_df = result[[label_col, value_col]].copy()
    plot_df[label_col] = plot_df[label_col].astype(str)

    fig, ax = plt.subplots(figsize=(max(6, 0.6 * len(plot_df) + 3), 5))
    sns.barplot(data=plot_df, x=label_col, y=value_col, ax=ax, color="steelblue")
    ax.set_title(report_id)
    ax.set_xlabel(label_col)
    ax.set_ylabel(value_col)
    ax.tick_params(axis='x', rotation=45)
    for label in ax.get_xticklabels():
        label.set_horizontalalignment('right')

    plt.tight_layout()
    file_path = output_dir / f"{report_id}.png"
    plt.savefig(file_path)
    plt.close(fig)
    logging.info(f"Plot für Report '{report_id}' gespeichert in '{file_path}'.")
    return file_path
