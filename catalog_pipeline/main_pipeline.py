import yaml
import logging
from pathlib import Path
import pandas as pd

# Adapter-Importe
from catalog_pipeline.adapters.netflix_adapter import NetflixAdapter

# Store / Reports
from catalog_pipeline.store.record_store import RecordStore
from catalog_pipeline.reports.catalog import ReportCatalog

# Loader / Analyse
from catalog_pipeline.loaders.csv_loader import CsvLoader
from catalog_pipeline.analysis.catalog_summary import write_catalog_summary
from catalog_pipeline.analysis.report_plots import plot_report_counts
from catalog_pipeline.utils.basic_validator import validate_catalog_frame


class ReportPipeline:
    """
    Lädt den Katalog einmalig, führt die konfigurierten Reports aus und
    speichert deren Ergebnisse (CSV, optional Plots) sowie eine Übersicht.
    """

    def __init__(self, config_filename: str | Path = 'config.yaml'):
        """
        Initialisiert die Pipeline.

        Liest die Konfigurationsdatei ein und initialisiert das Logging.

        Args:
            config_filename: Pfad der YAML-Konfigurationsdatei, relativ zum
                             Speicherort dieses Skripts oder absolut.

        Raises:
            FileNotFoundError: Wenn die Konfigurationsdatei nicht gefunden wird.
            yaml.YAMLError: Wenn die Konfigurationsdatei nicht gültig ist.
        """
        config_path: Path = Path(__file__).resolve().parent / config_filename
        if not config_path.exists():
            raise FileNotFoundError(
                f"Konfigurationsdatei nicht gefunden: {config_path}")
        # Relative Pfade in der Config beziehen sich auf deren Verzeichnis
        self.script_dir: Path = config_path.parent

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                self.config: dict = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logging.error(
                f"Fehler beim Parsen der Konfigurationsdatei {config_path}: {e}"
            )
            raise

        if self.config is None:  # yaml.safe_load liefert None bei leerer Datei
            self.config = {}
            logging.warning(
                f"Konfigurationsdatei {config_path} ist leer oder enthält keine gültige YAML-Struktur."
            )

        log_config: dict = self.config.get('logging', {})
        level_name = str(log_config.get('level', 'INFO')).upper()
        level_value = getattr(logging, level_name, logging.INFO)
        logging.basicConfig(
            level=level_value,
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S')
        logging.getLogger().setLevel(level_value)  # Root-Logger explizit setzen
        self.logger = logging.getLogger(__name__)

        self.output_cfg: dict = self.config.get('output', {}) or {}
        self.reports_cfg: dict = self.config.get('reports', {}) or {}
        self.validation_reports_dir: Path = self._resolve_path(
            self.output_cfg.get("validation_reports_dir", "data/validation_reports"))

    def _resolve_path(self, path_value: str | Path) -> Path:
        """
        Konvertiert einen Pfadwert aus der Konfiguration in ein absolutes Path-Objekt.

        Raises:
            ValueError: Wenn der path_value weder ein String noch ein Path-Objekt ist.
        """
        if isinstance(path_value, Path):
            path_obj = path_value
        elif isinstance(path_value, str):
            path_obj = Path(path_value)
        else:
            self.logger.error(
                f"Ungültiger Pfadwert in Config: {path_value} (Typ: {type(path_value)})"
            )
            raise ValueError(
                f"Pfadwert muss ein String oder Path-Objekt sein: {path_value}")

        if path_obj.is_absolute():
            return path_obj
        return (self.script_dir / path_obj).resolve()

    def load_store(self) -> RecordStore | None:
        """Extrahiert die Quelle, validiert sie und baut den RecordStore."""
        source_cfg = dict(self.config.get("source", {}) or {})
        if "file_path" not in source_cfg:
            self.logger.error("Keine Datenquelle ('source.file_path') in der Konfiguration definiert.")
            return None
        source_cfg["file_path"] = self._resolve_path(source_cfg["file_path"])
        source_cfg.setdefault("aux_base_dir", str(self.script_dir))
        if self.config.get("aux_output_dirs"):
            source_cfg.setdefault("aux_output_dirs", self.config["aux_output_dirs"])

        try:
            adapter = NetflixAdapter(source_cfg)
            raw_df = adapter.extract()
            df_ready = adapter.transform(raw_df)
        except FileNotFoundError:
            self.logger.error(f"Quelldatei nicht gefunden: {source_cfg['file_path']}")
            return None
        except Exception as e:
            self.logger.error(f"Fehler beim Ausführen des Adapters: {e}", exc_info=True)
            return None

        # --- Grundvalidierung des Adapter-DataFrames ---
        ok, errs = validate_catalog_frame(
            df_ready,
            df_name="Katalog-DF",
            error_report_path=str(self.validation_reports_dir / "catalog_report.txt"),
        )
        if not ok:
            self.logger.warning(f"Validation-Probleme im Katalog: {errs}")

        store = RecordStore(df_ready)
        self.logger.info(f"Katalog geladen: {len(store)} Einträge.")
        return store

    def _save_result(self, report_id: str, result: pd.DataFrame, chartable: bool) -> None:
        results_dir = self._resolve_path(self.output_cfg.get("results_dir", "data/reports"))
        try:
            CsvLoader(results_dir / f"{report_id}.csv").load(result)
        except OSError as e:
            self.logger.error(
                f"Fehler beim Speichern des Reports '{report_id}': {e}", exc_info=True)

        if chartable and self.output_cfg.get("save_plots", False):
            plots_dir = self._resolve_path(self.output_cfg.get("plots_dir", "data/reports/plots"))
            try:
                plot_report_counts(result, plots_dir, report_id)
            except Exception as e:
                self.logger.error(
                    f"Fehler beim Plotten des Reports '{report_id}': {e}", exc_info=True)

    def run(self) -> dict[str, pd.DataFrame]:
        """Führt die gesamte Report-Pipeline aus."""
        self.logger.info("Starte Report-Pipeline...")

        store = self.load_store()
        if store is None or store.is_empty():
            self.logger.error("Keine Daten geladen. Pipeline wird beendet.")
            return {}

        summary_path = self.output_cfg.get("summary_path")
        if summary_path:
            write_catalog_summary(store.frame(), self._resolve_path(summary_path))

        catalog = ReportCatalog(
            store,
            reference_date=self.reports_cfg.get("reference_date"),
            defaults=self.reports_cfg.get("params", {}),
        )
        enabled = self.reports_cfg.get("enabled") or catalog.names()

        results: dict[str, pd.DataFrame] = {}
        for report_id in enabled:
            try:
                result = catalog.run(report_id)
            except KeyError as e:
                self.logger.error(str(e))
                continue
            except Exception as e:
                self.logger.error(
                    f"Fehler beim Ausführen des Reports '{report_id}': {e}", exc_info=True)
                continue
            results[report_id] = result
            self._save_result(report_id, result, catalog.describe(report_id).chartable)

        self.logger.info(
            f"Report-Pipeline abgeschlossen. {len(results)} von {len(enabled)} Reports erstellt.")
        return results


if __name__ == '__main__':
    # Initialisiert und startet die Pipeline
    pipeline = ReportPipeline(config_filename='config.yaml')
    pipeline.run()
