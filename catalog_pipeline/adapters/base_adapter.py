from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

import pandas as pd
from catalog_pipeline.utils.save_aux_csv import save_aux_csv

class BaseAdapter(ABC):
    def __init__(self, source_config: dict):
        self.config = source_config

    @abstractmethod
    def extract(self) -> Any:
        """Lädt Rohdaten (ein DataFrame oder Roh-Objekte)"""
        pass

    @abstractmethod
    def transform(self, data: Any) -> pd.DataFrame:
        """Bereinigt und formatiert die Quelldaten zum Record-Schema"""
        pass

    def _log_aux_files(
        self,
        adapter_name: str,
        invalid_rows: list[dict],
        duplicate_rows: list[dict],
    ) -> None:
        base_dir = self.config.get("aux_base_dir")
        base_dir = Path(base_dir) if base_dir else None
        aux_dirs = self.config.get("aux_output_dirs")
        if invalid_rows:
            save_aux_csv("invalid", adapter_name, pd.DataFrame(invalid_rows),
                         base_dir=base_dir, aux_dirs=aux_dirs)
        if duplicate_rows:
            save_aux_csv("duplicates", adapter_name, pd.DataFrame(duplicate_rows),
                         base_dir=base_dir, aux_dirs=aux_dirs)
