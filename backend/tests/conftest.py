import os
import sys
from pathlib import Path

import pytest

# Keep tests deterministic and local-only.
os.environ["BANNERSEED_SKIP_DOTENV"] = "1"
os.environ["BANNERSEED_ENV"] = "test"
os.environ["BANNERSEED_HTTP_INSECURE_TLS"] = "0"
os.environ["BANNERSEED_HTTP_MAX_REDIRECTS"] = "10"
os.environ["BANNERSEED_HTTP_TIMEOUT_SECONDS"] = "2"

BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))

os.environ["BANNERSEED_UPLOAD_DIR"] = str(BACKEND_ROOT / "test_uploads")

TEST_DB_PATH = BACKEND_ROOT / "test_bannerseed.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
if TEST_DB_PATH.exists():
    TEST_DB_PATH.unlink()


@pytest.fixture
def session_factory(tmp_path: Path):
    from bannerseed.infra.db.session import build_engine, build_session_factory, init_db

    engine = build_engine(f"sqlite:///{tmp_path / 'seed.db'}")
    init_db(engine)
    yield build_session_factory(engine)
    engine.dispose()


@pytest.fixture
def store(session_factory):
    from bannerseed.infra.db.store import DatabaseStore

    return DatabaseStore(session_factory)


@pytest.fixture
def scratch_dir(tmp_path: Path) -> Path:
    path = tmp_path / "scratch"
    path.mkdir()
    return path
