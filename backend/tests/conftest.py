import json
import os
import tempfile
from pathlib import Path

import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import create_engine
from starlette.testclient import TestClient

# Set up test config before any app imports
_tmpdir = tempfile.mkdtemp()


def _make_quizzes(n_quizzes: int = 3, n_questions: int = 5) -> list[dict]:
    return [
        {
            "name": f"Quiz {q}",
            "category": "testing",
            "questions": [
                {
                    "question": f"Quiz {q} question {i}?",
                    "answers": [{"answer": "right"}, {"answer": "wrong"}],
                    "answer": "right",
                    "explanation": f"Because {q}.{i}",
                }
                for i in range(n_questions)
            ],
        }
        for q in range(n_quizzes)
    ]


_corpus_path = Path(_tmpdir) / "quizzes.json"
_corpus_path.write_text(json.dumps(_make_quizzes()))

_test_config_content = f"""\
srs:
  storage_key: "@test_srs_data"
  session_size: 10
  quizzes_path: "{_corpus_path}"
storage:
  backend: "memory"
database:
  url: "sqlite:///:memory:"
logging:
  level: "WARNING"
  file: "{_tmpdir}/test.log"
security:
  cors_origins:
    - "http://localhost"
"""

_test_config_path = Path(_tmpdir) / "config.yaml"
_test_config_path.write_text(_test_config_content)
os.environ["APP_CONFIG_PATH"] = str(_test_config_path)

from quizzy_srs.core.config import get_config

get_config.cache_clear()

from quizzy_srs.core.db import init_db
from quizzy_srs.main import app, srs_service
from quizzy_srs.models.quiz import Quiz
from quizzy_srs.services.kv_store import MemoryKeyValueStore, SQLKeyValueStore
from quizzy_srs.services.srs_service import SRSService
from quizzy_srs.services.srs_store import SchedulingStore


@pytest.fixture(name="quizzes")
def quizzes_fixture() -> list[Quiz]:
    return [Quiz.model_validate(q) for q in _make_quizzes()]


@pytest.fixture(name="kv")
def kv_fixture() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture(name="store")
def store_fixture(kv) -> SchedulingStore:
    return SchedulingStore(kv, storage_key="@test_srs_data")


@pytest.fixture(name="service")
def service_fixture(store) -> SRSService:
    return SRSService(store)


@pytest.fixture(name="sql_kv")
def sql_kv_fixture() -> SQLKeyValueStore:
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(test_engine)
    return SQLKeyValueStore(test_engine)


@pytest.fixture(name="client")
def client_fixture():
    # Fresh scheduling document per test
    srs_service.store.kv = MemoryKeyValueStore()
    srs_service._records = None
    with TestClient(app) as client:
        yield client
