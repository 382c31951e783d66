"""
Pytest fixtures for the Beth Yw? test suite.

Provides:
- Structured logging configured once per session, and a log capture fixture
- In-memory source streams and column mappings for the three source formats
- A dataset directory laid out like the default catalogue
"""

import json
import logging
from io import StringIO
from pathlib import Path

import pytest

# Importers self-register with the kernel's ImporterRegistry on import
import bethyw_ingestion  # noqa: F401

from bethyw_kernel.domain.areas import AreaStore
from bethyw_kernel.domain.sources import ColumnMapping
from bethyw_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)

# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG)
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Capture bethyw logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs, store):
            store.populate(...)
            logs = captured_logs()
            assert any(r["message"] == "import_completed" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("bethyw")
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)


# =============================================================================
# Source fixtures
# =============================================================================

AREAS_CSV = (
    "Local authority code,Name (eng),Name (cym)\n"
    "W06000011,Swansea,Abertawe\n"
    "W06000015,Cardiff,Caerdydd\n"
    "W06000010,Carmarthenshire,Sir Gaerfyrddin\n"
)

WIDE_CSV = (
    "AuthorityCode,2010,2011,2012,2013,2014,2015,2016,2017,2018,2019,2020\n"
    "W06000011,100,101,102,103,104,105,106,107,108,109,110\n"
    "W06000015,200,201,202,203,204,205,206,207,208,209,210\n"
)

POPDEN_RECORDS = [
    {
        "Localauthority_Code": "W06000011",
        "Localauthority_ItemName_ENG": "Swansea",
        "Measure_Code": "Dens",
        "Measure_ItemName_ENG": "Population density",
        "Year_Code": "1991",
        "Data": 20.5,
    },
    {
        "Localauthority_Code": "W06000011",
        "Localauthority_ItemName_ENG": "Swansea",
        "Measure_Code": "Dens",
        "Measure_ItemName_ENG": "Population density",
        "Year_Code": "2019",
        "Data": 30.5,
    },
    {
        "Localauthority_Code": "W06000015",
        "Localauthority_ItemName_ENG": "Cardiff",
        "Measure_Code": "Pop",
        "Measure_ItemName_ENG": "Population",
        "Year_Code": "2019",
        "Data": "366903",
    },
]


@pytest.fixture
def store() -> AreaStore:
    return AreaStore()


@pytest.fixture
def areas_mapping() -> ColumnMapping:
    return ColumnMapping.of(
        name="areas",
        auth_code="Local authority code",
        auth_name_eng="Name (eng)",
        auth_name_cym="Name (cym)",
    )


@pytest.fixture
def wide_mapping() -> ColumnMapping:
    return ColumnMapping.of(
        name="complete-pop",
        auth_code="AuthorityCode",
        single_measure_code="pop",
        single_measure_name="Population",
    )


@pytest.fixture
def json_mapping() -> ColumnMapping:
    return ColumnMapping.of(
        name="popden",
        auth_code="Localauthority_Code",
        auth_name_eng="Localauthority_ItemName_ENG",
        measure_code="Measure_Code",
        measure_name="Measure_ItemName_ENG",
        year="Year_Code",
        value="Data",
    )


@pytest.fixture
def single_json_mapping() -> ColumnMapping:
    return ColumnMapping.of(
        name="trains",
        auth_code="LocalAuthority_Code",
        auth_name_eng="LocalAuthority_ItemName_ENG",
        single_measure_code="rail",
        single_measure_name="Rail passenger journeys",
        year="Year_Code",
        value="Data",
    )


@pytest.fixture
def areas_stream() -> StringIO:
    return StringIO(AREAS_CSV)


@pytest.fixture
def wide_stream() -> StringIO:
    return StringIO(WIDE_CSV)


@pytest.fixture
def popden_stream() -> StringIO:
    return StringIO(json.dumps(POPDEN_RECORDS))


@pytest.fixture
def dataset_dir(tmp_path: Path) -> Path:
    """Directory holding areas.csv, popu1009.json and complete-popu1009-pop.csv."""
    (tmp_path / "areas.csv").write_text(AREAS_CSV, encoding="utf-8")
    (tmp_path / "popu1009.json").write_text(
        json.dumps({"value": POPDEN_RECORDS}), encoding="utf-8"
    )
    (tmp_path / "complete-popu1009-pop.csv").write_text(WIDE_CSV, encoding="utf-8")
    return tmp_path
