# tests/conftest.py
import os
import sys
import tempfile
import shutil
from pathlib import Path
import io
from PIL import Image

import pytest
from fastapi.testclient import TestClient

# ensure project root is importable
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

# create a dedicated temp data dir at import time so catalog.database picks up
# the test DATA_DIR before any test imports it
_tmp_data_dir = tempfile.mkdtemp(prefix="test_data_")
from catalog import config as catalog_config  # keep after tmpdir creation
_orig_settings_data_dir = catalog_config.settings.DATA_DIR
catalog_config.settings.DATA_DIR = Path(_tmp_data_dir)

from catalog import database as catalog_database  # noqa: E402
catalog_database.DATA_DIR = Path(_tmp_data_dir)
catalog_database.db.data_dir = Path(_tmp_data_dir)

from catalog.main import app  # noqa: E402
from catalog.models.form_draft import FormDraft  # noqa: E402


@pytest.fixture(autouse=True)
def clean_products_file():
    """Every test starts with no stored products."""
    products_path = catalog_database.db.path_for("products")
    if products_path.exists():
        products_path.unlink()
    yield


def pytest_sessionfinish(session, exitstatus):
    catalog_config.settings.DATA_DIR = _orig_settings_data_dir
    shutil.rmtree(_tmp_data_dir, ignore_errors=True)


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def file_db(tmp_path):
    """A FileBackedDB of its own, isolated from the app's data dir."""
    return catalog_database.FileBackedDB(tmp_path)


@pytest.fixture
def valid_draft():
    """
    Return a callable building a fully valid draft; keyword args override fields.
    Usage: draft = valid_draft(price="10.999")
    """
    def _fn(**overrides):
        fields = {
            "name": "Wireless Mouse",
            "price": "29.99",
            "category": "Electronics",
            "stock_quantity": "15",
            "description": "",
            "image_input": None,
        }
        fields.update(overrides)
        return FormDraft(**fields)
    return _fn


@pytest.fixture
def make_sample_image_bytes():
    """
    Return a callable that generates image bytes for tests that need uploads.
    Usage: png = make_sample_image_bytes(fmt="PNG")
    """
    def _fn(size=(32, 32), color=(180, 120, 60), fmt="JPEG"):
        bio = io.BytesIO()
        im = Image.new("RGB", size, color)
        im.save(bio, format=fmt)
        bio.seek(0)
        return bio.read()
    return _fn
