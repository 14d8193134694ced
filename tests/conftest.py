from pathlib import Path

import pytest

from tests.utils.fakes import FakeDriver

TEMPLATES = {
    "get-all-states": "select code, name from states order by code",
    "get-one-state": "select code, name from states where code = $code",
    "get-all-states-starting-with": "select code, name from states where name ilike $term || '%'",
    "get-selected-states": "select code, name from states where code = any($codes)",
    "get-ordered-states": "select code, name from states order by $$column limit $limit",
    "insert-row": "insert into rows (label) values ($label) returning id, label",
    "get-missing-param": "select * from states where code = $code and name = $name",
}


@pytest.fixture()
def sql_dir(tmp_path: Path) -> Path:
    for name, text in TEMPLATES.items():
        (tmp_path / f"{name}.sql").write_text(text, encoding="utf-8")
    return tmp_path


@pytest.fixture()
def fake_driver() -> FakeDriver:
    return FakeDriver()
