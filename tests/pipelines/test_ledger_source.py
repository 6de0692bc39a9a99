import pytest

from beanlint.errors import LedgerIoError
from beanlint.pipelines.ledger_source import (
    FilesystemLedgerSource,
    InlineLedgerSource,
    get_ledger_source,
    load_ledger,
)


def _tree(root):
    (root / "2000").mkdir()
    (root / "2000" / "bank.beancount").write_text("2000-01-01 open Assets:Bank:Account", encoding="utf-8")
    (root / "accounts.beancount").write_text("2000-01-01 open Assets:Cash\n", encoding="utf-8")
    (root / "notes.txt").write_text("not a ledger\n", encoding="utf-8")


def test_filesystem_source_finds_ledgers_recursively(tmp_path):
    _tree(tmp_path)
    files = FilesystemLedgerSource(tmp_path).load_files()
    assert [f.path.name for f in files] == ["bank.beancount", "accounts.beancount"]
    assert all(f.source.endswith("\n") for f in files)
    assert files[0].identity == str(tmp_path / "2000" / "bank.beancount")


def test_missing_directory_has_no_files(tmp_path):
    assert FilesystemLedgerSource(tmp_path / "nowhere").load_files() == []


def test_single_file_path(tmp_path):
    _tree(tmp_path)
    source = get_ledger_source(tmp_path / "accounts.beancount")
    assert [f.path.name for f in source.load_files()] == ["accounts.beancount"]


def test_unreadable_file_raises_io_error(tmp_path):
    missing = tmp_path / "gone.beancount"
    with pytest.raises(LedgerIoError) as excinfo:
        FilesystemLedgerSource(tmp_path, files=[missing]).load_files()
    assert excinfo.value.path == missing
    assert str(excinfo.value).startswith("io: ")


def test_load_ledger_resolves_directives_per_file(tmp_path):
    _tree(tmp_path)
    ledger = load_ledger(get_ledger_source(tmp_path))
    directives = ledger.directives()
    assert len(directives) == 2
    assert {d.location.file.path.name for d in directives} == {"bank.beancount", "accounts.beancount"}
    assert all(d.location.file.display_name == str(d.location.file.path) for d in directives)


def test_inline_source():
    ledger = load_ledger(InlineLedgerSource({"one": "2000-01-01 open Assets:Cash", "two": ""}))
    assert ledger.file("two").source == ""
    directives = ledger.directives()
    assert [d.location.file.identity for d in directives] == ["one"]


def test_non_utf8_file_raises_io_error(tmp_path):
    latin = tmp_path / "latin1.beancount"
    latin.write_bytes('2000-01-01 * "Caf\xe9" ""\n'.encode("latin-1"))
    with pytest.raises(LedgerIoError) as excinfo:
        FilesystemLedgerSource(tmp_path).load_files()
    assert excinfo.value.path == latin
    assert isinstance(excinfo.value.cause, UnicodeDecodeError)
    assert str(excinfo.value).startswith(f"io: {latin}: ")
