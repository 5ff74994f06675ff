from pathlib import Path

import pandas as pd

class CsvLoader:
    def __init__(self, path: str | Path):
        self.path = Path(path)

    def load(self, df: pd.DataFrame) -> Path:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(self.path, index=False, encoding="utf-8")
        print(f"✅ Report gespeichert ({len(df)} Zeilen). Datei unter: {self.path}")
        return self.path
