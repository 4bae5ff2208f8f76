from pathlib import Path

import pytest

from conftest import write_catalog
from errorhints.hints import (
    DEFAULT_CATALOG_PATH,
    HintCatalog,
    HintRecord,
    NotFoundError,
    ParseError,
    load_catalog,
)


def test_load_catalog_preserves_order(tmp_path: Path):
    records = load_catalog(write_catalog(tmp_path))
    assert records == [
        HintRecord(type="NullPointerException", hint="Check for null before use"),
        HintRecord(type="IndexOutOfBounds", hint="Check array bounds"),
    ]
    assert records[0].label == "NullPointerException: Check for null before use"


def test_load_catalog_missing_file(tmp_path: Path):
    with pytest.raises(NotFoundError) as excinfo:
        load_catalog(tmp_path / "nonexistent.yml")
    assert isinstance(excinfo.value, FileNotFoundError)
    assert excinfo.value.path == tmp_path / "nonexistent.yml"


def test_load_catalog_directory_is_not_found(tmp_path: Path):
    with pytest.raises(NotFoundError):
        load_catalog(tmp_path)


@pytest.mark.parametrize(
    "content",
    [
        "errors: [unclosed",
        "",
        "- type: A\n  hint: B\n",
        "hints:\n  - type: A\n    hint: B\n",
        "errors: NullPointerException\n",
        "errors:\n  - just a string\n",
        "errors:\n  - type: A\n",
        "errors:\n  - type: 42\n    hint: B\n",
        "errors:\n  - type: A\n    hint: [B]\n",
    ],
)
def test_load_catalog_rejects_malformed(tmp_path: Path, content: str):
    path = tmp_path / "hints.yml"
    path.write_text(content)
    with pytest.raises(ParseError):
        load_catalog(path)


def test_load_catalog_empty_errors(tmp_path: Path):
    assert load_catalog(write_catalog(tmp_path, errors=[])) == []
    path = tmp_path / "null.yml"
    path.write_text("errors:\n")
    assert load_catalog(path) == []


def test_hint_catalog_loads_lazily_and_reloads(tmp_path: Path):
    path = write_catalog(tmp_path)
    catalog = HintCatalog(path)
    assert not catalog.loaded
    assert len(catalog) == 2
    assert catalog.loaded

    write_catalog(tmp_path, errors=[{"type": "KeyError", "hint": "Use .get()"}])
    assert len(catalog) == 2
    catalog.reload()
    assert [record.type for record in catalog] == ["KeyError"]


def test_hint_catalog_reload_failure_keeps_records(tmp_path: Path):
    path = write_catalog(tmp_path)
    catalog = HintCatalog(path)
    assert len(catalog) == 2
    path.write_text("errors: [unclosed")
    with pytest.raises(ParseError):
        catalog.reload()
    assert len(catalog) == 2


def test_bundled_catalog_is_valid():
    records = load_catalog(DEFAULT_CATALOG_PATH)
    assert records
    assert records[0] == HintRecord(type="NullPointerException", hint="Check for null before use")


def test_load_catalog_unreadable_file(tmp_path: Path, monkeypatch):
    path = write_catalog(tmp_path)

    def denied(self, *args, **kwargs):
        raise PermissionError(13, "Permission denied", str(self))

    monkeypatch.setattr(Path, "read_text", denied)
    with pytest.raises(NotFoundError):
        load_catalog(path)


def test_load_catalog_invalid_utf8(tmp_path: Path):
    path = tmp_path / "hints.yml"
    path.write_bytes(b"\xff\xfe")
    with pytest.raises(ParseError):
        load_catalog(path)
