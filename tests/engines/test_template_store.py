"""Unit tests for engines.sql.template_store."""

from pathlib import Path

import pytest

from namedquery.core.errors import TemplateNotFound
from namedquery.engines.sql import TemplateStore


def test_load_reads_file(sql_dir: Path) -> None:
    store = TemplateStore(sql_dir)
    assert store.load("get-one-state") == "select code, name from states where code = $code"


def test_load_is_cached_for_store_lifetime(sql_dir: Path) -> None:
    store = TemplateStore(sql_dir)
    first = store.load("get-all-states")
    (sql_dir / "get-all-states.sql").write_text("select 'changed'", encoding="utf-8")
    assert store.load("get-all-states") == first
    assert "get-all-states" in store


def test_missing_template_raises(sql_dir: Path) -> None:
    store = TemplateStore(sql_dir)
    with pytest.raises(TemplateNotFound) as exc:
        store.load("missing-template")
    assert exc.value.name == "missing-template"
    assert "missing-template" not in store


def test_path_for(tmp_path: Path) -> None:
    store = TemplateStore(str(tmp_path))
    assert store.path_for("a") == tmp_path / "a.sql"


def test_undecodable_template_raises_not_found(sql_dir: Path) -> None:
    (sql_dir / "bad.sql").write_bytes(b"select '\xff'")
    store = TemplateStore(sql_dir)
    with pytest.raises(TemplateNotFound, match="not valid UTF-8"):
        store.load("bad")
    assert "bad" not in store
