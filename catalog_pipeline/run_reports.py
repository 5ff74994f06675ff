from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, List

from catalog_pipeline.adapters.netflix_adapter import NetflixAdapter
from catalog_pipeline.loaders.csv_loader import CsvLoader
from catalog_pipeline.reports.catalog import ReportCatalog, ReportNotFoundError
from catalog_pipeline.reports.registry import REPORTS
from catalog_pipeline.store.record_store import RecordStore


def _parse_params(raw_params: List[str]) -> Dict[str, str]:
    """key=value Paare von der Kommandozeile."""
    params: Dict[str, str] = {}
    for raw in raw_params:
        if "=" not in raw:
            raise SystemExit(f"Ungültiger Parameter (erwartet key=value): {raw}")
        key, value = raw.split("=", 1)
        params[key.strip().replace("-", "_")] = value.strip()
    return params


def _list_reports() -> None:
    for spec in REPORTS.values():
        defaults = ", ".join(f"{k}={v}" for k, v in spec.defaults.items()) or "-"
        print(f"{spec.id:<24} {spec.purpose}  [{defaults}]")


def main(argv: List[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Run a catalog report against a Netflix CSV export.")
    p.add_argument("report", nargs="?", help="Report id, e.g. top-countries")
    p.add_argument("--list", action="store_true", help="List known reports and exit")
    p.add_argument("--data", help="Path to the catalog CSV")
    p.add_argument("--out", default=None, help="Output directory for the result CSV")
    p.add_argument("--preview", type=int, default=10, help="How many rows to preview in stdout")
    p.add_argument("--reference-date", default=None, help="'Today' for date-relative reports (YYYY-MM-DD)")
    p.add_argument(
        "--param",
        action="append",
        default=[],
        help="Report parameter as key=value. Repeatable, e.g. --param top_n=10 --param country=India",
    )
    args = p.parse_args(argv)

    if args.list:
        _list_reports()
        return 0
    if not args.report:
        p.error("report id is required (or use --list)")
    if not args.data:
        p.error("--data is required")

    logging.basicConfig(level=logging.WARNING, format='%(asctime)s - %(levelname)s - %(message)s')

    data_path = Path(args.data)
    if not data_path.exists():
        raise SystemExit(f"Datei nicht gefunden: {data_path}")

    adapter = NetflixAdapter({"file_path": data_path, "aux_base_dir": str(data_path.parent)})
    store = RecordStore(adapter.transform(adapter.extract()))

    try:
        catalog = ReportCatalog(store, reference_date=args.reference_date)
        spec = catalog.describe(args.report)
        result = catalog.run(args.report, **_parse_params(args.param))
    except ReportNotFoundError as e:
        raise SystemExit(str(e))
    except (TypeError, ValueError) as e:
        raise SystemExit(f"Ungültige Parameter: {e}")

    print(f"[run] {spec.id}: {spec.purpose}", file=sys.stderr)
    print(f"[ok] rows={len(result)} cols={len(result.columns)}", file=sys.stderr)

    if args.out:
        CsvLoader(Path(args.out) / f"{spec.id}.csv").load(result)

    if args.preview > 0:
        print("\n=== Ergebnis (head) ===")
        print(result.head(args.preview).to_string(index=False))

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
