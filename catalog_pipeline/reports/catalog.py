# catalog_pipeline/reports/catalog.py
import logging
from datetime import date
from typing import Any, Dict, Iterable, List, Mapping, Tuple

import pandas as pd

from catalog_pipeline.reports.registry import REPORTS, ReportSpec
from catalog_pipeline.store.record_store import RecordStore
from catalog_pipeline.transform.normalize import split_tokens


class ReportNotFoundError(KeyError):
    """Angefragter Report existiert nicht im Katalog."""

    def __init__(self, name: str, known: Iterable[str]):
        self.name = name
        self.known = sorted(known)
        super().__init__(name)

    def __str__(self) -> str:
        return f"Unbekannter Report: {self.name}. Bekannt: {', '.join(self.known)}"


def _coerce(value: Any, default: Any) -> Any:
    """Bringt Parameter (z.B. Strings von der CLI) auf den Typ des Defaults."""
    if isinstance(default, bool):
        if isinstance(value, str):
            return value.strip().lower() in {"1", "true", "yes", "ja"}
        return bool(value)
    if isinstance(default, int) and isinstance(value, str):
        return int(value.strip())
    if isinstance(default, (list, tuple)) and isinstance(value, str):
        return split_tokens(value)
    return value


class ReportCatalog:
    """
    Führt die registrierten Reports gegen einen RecordStore aus.

    Der Store wird explizit übergeben; `reference_date` legt "heute" für
    datumsbezogene Reports fest (Standard: date.today()).
    """

    def __init__(
        self,
        store: RecordStore,
        reference_date: date | str | None = None,
        defaults: Mapping[str, Mapping[str, Any]] | None = None,
        reports: Mapping[str, ReportSpec] | None = None,
    ):
        self.logger = logging.getLogger(__name__)
        self.store = store
        self.reports: Mapping[str, ReportSpec] = reports if reports is not None else REPORTS
        if isinstance(reference_date, str):
            reference_date = pd.Timestamp(reference_date).date()
        self.reference_date = reference_date
        self.param_overrides: Dict[str, Dict[str, Any]] = {}

        for report_id, overrides in (defaults or {}).items():
            if report_id not in self.reports:
                self.logger.warning(f"Parameter für unbekannten Report '{report_id}' ignoriert.")
                continue
            known = self.reports[report_id].defaults
            accepted = {k: v for k, v in (overrides or {}).items() if k in known}
            ignored = set(overrides or {}) - set(accepted)
            if ignored:
                self.logger.warning(
                    f"Report '{report_id}': unbekannte Parameter ignoriert: {', '.join(sorted(ignored))}")
            self.param_overrides[report_id] = accepted

    @property
    def today(self) -> date:
        return self.reference_date or date.today()

    def names(self) -> List[str]:
        return list(self.reports)

    def describe(self, report_id: str) -> ReportSpec:
        if report_id not in self.reports:
            raise ReportNotFoundError(report_id, self.reports)
        return self.reports[report_id]

    def resolve_params(self, report_id: str, **params: Any) -> Dict[str, Any]:
        spec = self.describe(report_id)
        unknown = set(params) - set(spec.defaults)
        if unknown:
            raise TypeError(
                f"Report '{report_id}' kennt die Parameter {', '.join(sorted(unknown))} nicht "
                f"(erlaubt: {', '.join(sorted(spec.defaults)) or '-'})")
        merged = {**spec.defaults, **self.param_overrides.get(report_id, {}), **params}
        return {k: _coerce(v, spec.defaults[k]) for k, v in merged.items()}

    def run(self, report_id: str, **params: Any) -> pd.DataFrame:
        """
        Führt einen Report aus und liefert seine Ergebniszeilen als DataFrame.

        Report-Parameter kommen als Keywords, z.B. run("by-director", name="...").
        """
        spec = self.describe(report_id)
        resolved = self.resolve_params(report_id, **params)
        result = spec.runner(self.store.frame(), self.today, **resolved)
        self.logger.info(f"Report '{report_id}' ausgeführt: {len(result)} Zeilen.")
        return result[spec.columns].reset_index(drop=True)

    def rows(self, report_id: str, **params: Any) -> List[Tuple[Any, ...]]:
        return list(self.run(report_id, **params).itertuples(index=False, name=None))

    def run_all(self, report_ids: Iterable[str] | None = None) -> Dict[str, pd.DataFrame]:
        if report_ids is None:
            report_ids = self.names()
        return {report_id: self.run(report_id) for report_id in report_ids}
