"""Pytest configuration and shared fixtures."""

import io
import json

import pytest
from pathlib import Path

from inspector.loader import load_document
from inspector.report import ReportLog
from inspector.resolver import build_schema_index


@pytest.fixture(scope="session")
def project_root():
    """Directory holding run_inspector.py and the sample petstore document."""
    return Path(__file__).parent.parent


@pytest.fixture(scope="session")
def fixtures_path():
    """Path to test fixtures."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def report():
    """Report log writing into in-memory buffers."""
    return ReportLog(stream=io.StringIO(), error_stream=io.StringIO())


@pytest.fixture
def catalog(fixtures_path):
    return load_document(fixtures_path / "catalog.json")


@pytest.fixture
def catalog_index(catalog):
    return build_schema_index(catalog.component_schemas)


@pytest.fixture
def sample_api_spec(tmp_path):
    """openapi.json generated by the sample FastAPI application."""
    from sample_api import app

    spec_path = tmp_path / "openapi.json"
    spec_path.write_text(json.dumps(app.openapi(), indent=2), encoding="utf-8")
    return spec_path
