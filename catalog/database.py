# catalog/database.py
"""
Simple file-backed storage layer using CSV (preferred) or Excel (xlsx).
Provides basic CRUD primitives per table name. Uses file locking to avoid
simultaneous writes corrupting files.

Usage:
    from catalog.database import db
    db.list_records("products")
    db.get_record("products", "id", "8f2c...")
    db.create_record("products", {"name": "Desk Lamp", "price": 19.5})
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional
import pandas as pd
import uuid
from filelock import FileLock
from catalog.config import settings

logger = logging.getLogger(__name__)

DATA_DIR = Path(settings.DATA_DIR)
if not DATA_DIR.exists():
    DATA_DIR.mkdir(parents=True, exist_ok=True)


class FileBackedDB:
    """
    Manages CSV / Excel files inside DATA_DIR.
    Table name corresponds to a file name in settings (or you may pass full filename).
    """

    def __init__(self, data_dir: Path = DATA_DIR):
        self.data_dir = Path(data_dir)

    def path_for(self, table: str) -> Path:
        """
        Resolve table -> file path. If table looks like a filename (has .csv/.xlsx),
        use it directly (relative to data_dir). Otherwise try config mapping,
        else fallback to table + .csv
        """
        if table.endswith(".csv") or table.endswith(".xlsx"):
            return self.data_dir / Path(table)

        mapping = {
            "products": settings.PRODUCTS_FILE,
        }
        filename = mapping.get(table, f"{table}.csv")
        return self.data_dir / Path(filename)

    def _lock_for(self, path: Path) -> FileLock:
        return FileLock(str(path) + ".lock")

    def _read_path(self, path: Path) -> pd.DataFrame:
        if not path.exists():
            return pd.DataFrame()
        if path.suffix.lower() in (".xls", ".xlsx"):
            return pd.read_excel(path, dtype=str).fillna("")
        return pd.read_csv(path, dtype=str, keep_default_na=False).fillna("")

    def _read_df(self, table: str) -> pd.DataFrame:
        return self._read_path(self.path_for(table))

    def _write_nolock(self, path: Path, df: pd.DataFrame) -> None:
        """
        Write DataFrame to `path` WITHOUT acquiring file lock.
        Use this only when the caller already holds the lock.
        """
        path.parent.mkdir(parents=True, exist_ok=True)
        if path.suffix.lower() in (".xls", ".xlsx"):
            df.to_excel(path, index=False)
        else:
            df.to_csv(path, index=False)

    @staticmethod
    def _row_to_dict(row: Dict[str, Any]) -> Dict[str, Any]:
        return {k: (None if pd.isna(v) else v) for k, v in row.items()}

    # --- high-level CRUD primitives ---

    def list_records(self, table: str) -> List[Dict[str, Any]]:
        df = self._read_df(table)
        if df.empty:
            return []
        return [self._row_to_dict(r) for r in df.to_dict(orient="records")]

    def get_record(self, table: str, key: str, value: Any) -> Optional[Dict[str, Any]]:
        df = self._read_df(table)
        if df.empty or key not in df.columns:
            return None
        # treat everything as string for comparison simplicity
        mask = df[key].astype(str) == str(value)
        if not mask.any():
            return None
        return self._row_to_dict(df[mask].iloc[0].to_dict())

    def create_record(self, table: str, data: Dict[str, Any], id_field: str = "id") -> Dict[str, Any]:
        """
        Create a new record. If id_field not present in `data`, one will be generated (uuid4 hex).
        Returns the saved record (with id).
        """
        data = dict(data)
        if id_field not in data or not data.get(id_field):
            data[id_field] = uuid.uuid4().hex
        new_row = {k: ("" if v is None else v) for k, v in data.items()}
        path = self.path_for(table)
        path.parent.mkdir(parents=True, exist_ok=True)
        with self._lock_for(path):
            df = self._read_path(path)
            df = pd.concat([df, pd.DataFrame([new_row])], ignore_index=True, sort=False)
            self._write_nolock(path, df)
        logger.debug("created %s record %s", table, data[id_field])
        return data

    def update_record(self, table: str, key: str, value: Any, updates: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Update rows where df[key] == value with fields in updates. Returns the updated first row dict or None.
        """
        path = self.path_for(table)
        with self._lock_for(path):
            df = self._read_path(path)
            if df.empty or key not in df.columns:
                return None
            mask = df[key].astype(str) == str(value)
            if not mask.any():
                return None
            for k, v in updates.items():
                if k not in df.columns:
                    df[k] = ""
                df.loc[mask, k] = "" if v is None else str(v)
            self._write_nolock(path, df)
            return self._row_to_dict(df[mask].iloc[0].to_dict())


# module-level singleton for convenience
db = FileBackedDB()
