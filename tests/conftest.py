from datetime import datetime, timezone

import pytest

from zenith_tracker.models import Chapter, Subject


@pytest.fixture
def tmp_db(tmp_path):
    """Provide a temporary SQLite database path for tests."""
    db_path = str(tmp_path / "test_zenith.db")
    return db_path


@pytest.fixture
def now():
    return datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def make_subject():
    def _make(*chapters, id="s1", name="Physics", color="#ef4444"):
        return Subject(id=id, name=name, color=color, chapters=list(chapters))
    return _make


@pytest.fixture
def make_chapter():
    def _make(id="c1", name="Kinematics", **kwargs):
        kwargs.setdefault("is_completed", True)
        return Chapter(id=id, name=name, **kwargs)
    return _make
