# catalog/api/deps.py
from fastapi import Depends

from catalog.database import db, FileBackedDB
from catalog.services.product_store import FileProductStore, ProductStore


def get_db() -> FileBackedDB:
    """
    Dependency that returns the file-backed DB object.
    Usage:
        db = Depends(get_db)
    """
    return db


def get_product_store(file_db: FileBackedDB = Depends(get_db)) -> ProductStore:
    return FileProductStore(file_db)
