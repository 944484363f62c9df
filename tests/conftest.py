import os
import sys

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from hyperinvoice.db.session import build_engine, build_session_factory, init_db
from hyperinvoice.services.mock_store import reset_mock_store
from hyperinvoice.services.repository import InvoiceRepository


@pytest.fixture(autouse=True)
def _reset_store() -> None:
    reset_mock_store()
    yield
    reset_mock_store()


@pytest.fixture
def repository() -> InvoiceRepository:
    engine = build_engine("sqlite:///:memory:")
    init_db(engine)
    yield InvoiceRepository(build_session_factory(engine))
    engine.dispose()
