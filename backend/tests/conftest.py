import os
import tempfile

# Settings and the module-level engine are built at import time
os.environ.setdefault("RUNLOG_DATA_DIR", tempfile.mkdtemp(prefix="runninglog-tests-"))
os.environ.setdefault("RUNLOG_DATABASE_URL", "sqlite+pysqlite:///:memory:")

import pytest  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from runninglog.core.config import Settings  # noqa: E402
from runninglog.db import init_db, make_engine  # noqa: E402


@pytest.fixture()
def engine():
    eng = make_engine("sqlite+pysqlite:///:memory:")
    init_db(bind=eng)
    yield eng
    eng.dispose()


@pytest.fixture()
def db(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def settings(tmp_path):
    return Settings(
        _env_file=None,
        data_dir=str(tmp_path / "data"),
        database_url="sqlite+pysqlite:///:memory:",
        is_dark_mode=False,
        repo_dir=None,
        miles_repo_dir=None,
    )


@pytest.fixture()
def client(engine, settings):
    from fastapi.testclient import TestClient  # noqa: WPS433
    from runninglog.core.config import get_settings
    from runninglog.db import get_db
    from runninglog.main import app

    Session = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def _get_db():
        session = Session()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_settings] = lambda: settings
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
