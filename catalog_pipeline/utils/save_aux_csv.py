from pathlib import Path
from typing import Mapping
import pandas as pd
import yaml

# Pfad zur zentralen Pipeline-Config ermitteln (eine Ebene über utils)
CONFIG_PATH = Path(__file__).resolve().parent.parent / "config.yaml"

try:
    _cfg = yaml.safe_load(CONFIG_PATH.read_text(encoding="utf-8")) or {}
except FileNotFoundError:
    _cfg = {}

# Verzeichnisse aus der gepackten Config oder Fallback
_AUX_DIRS = _cfg.get("aux_output_dirs", {
    "invalid": "data/validation_reports/invalid",
    "duplicates": "data/validation_reports/duplicates",
})


def _get_target_dir(
    kind: str,
    base_dir: Path | None = None,
    aux_dirs: Mapping[str, str] | None = None,
) -> Path:
    """Liefert das Zielverzeichnis für eine CSV-Art (invalid/duplicates)."""
    dirs = aux_dirs if aux_dirs is not None else _AUX_DIRS
    target = Path(dirs.get(kind, f"data/validation_reports/{kind}"))
    if target.is_absolute():
        return target
    return (base_dir or CONFIG_PATH.parent) / target


def save_aux_csv(
    kind: str,
    adapter_name: str,
    df: pd.DataFrame,
    base_dir: Path | None = None,
    aux_dirs: Mapping[str, str] | None = None,
) -> Path:
    """
    Speichert DataFrame unter <dir>/<adapter_name>_<kind>.csv.

    `aux_dirs` überschreibt die Verzeichnisse aus der gepackten config.yaml.
    """
    target_dir = _get_target_dir(kind, base_dir, aux_dirs)
    target_dir.mkdir(parents=True, exist_ok=True)
    out_path = target_dir / f"{adapter_name}_{kind}.csv"
    df.to_csv(out_path, index=False)
    return out_path
