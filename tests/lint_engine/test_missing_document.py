from beanlint.lint_engine.lints.missing_document import MISSING_DOCUMENT, find_missing_documents


LEDGER = """
2000-01-04 * "File exists - ok" ""
    statement: "receipts/2000-01-04.2.power.pdf"
    Assets:Bank:Account  -1500 DKK
    Expenses:Utilities:Power

2000-01-03 * "No statement - no error" ""
    Assets:Bank:Account  -1500 DKK
    Expenses:Utilities:Power

2000-01-01 * "File not found!" ""
    statement: "receipts/non-existent-file.pdf"
    Assets:Bank:Account  -1500 DKK
    Expenses:Utilities:Power
"""


def _write_receipt(root):
    receipts = root / "receipts"
    receipts.mkdir()
    (receipts / "2000-01-04.2.power.pdf").write_bytes(b"%PDF")


def test_missing_documents_relative_to_working_directory(inline_directives, tmp_path, monkeypatch):
    _write_receipt(tmp_path)
    monkeypatch.chdir(tmp_path)

    missing = find_missing_documents(inline_directives(LEDGER))
    assert len(missing) == 1
    assert missing[0].statement == "receipts/non-existent-file.pdf"
    assert missing[0].headline() == (
        "transaction File not found!'s statement points to non-existent file path receipts/non-existent-file.pdf"
    )


def test_missing_documents_relative_to_document_root(inline_directives, tmp_path):
    _write_receipt(tmp_path)
    missing = find_missing_documents(inline_directives(LEDGER), document_root=tmp_path)
    assert [m.entry.inner.payee for m in missing] == ["File not found!"]


def test_absolute_statement_ignores_document_root(inline_directives, tmp_path):
    receipt = tmp_path / "absolute.pdf"
    receipt.write_bytes(b"%PDF")
    directives = inline_directives(
        f"""
        2000-01-01 * "Absolute" ""
            statement: "{receipt}"
            Assets:Bank:Account  -1500 DKK
            Expenses:Utilities:Power
        """
    )
    assert find_missing_documents(directives, document_root=tmp_path / "elsewhere") == []


def test_lint_reads_document_root_from_config(make_ctx, tmp_path):
    _write_receipt(tmp_path)
    lint = MISSING_DOCUMENT()

    ctx = make_ctx(LEDGER, client_lints={"MISSING-DOCUMENT": {"document_root": str(tmp_path)}})
    assert len(lint.evaluate(ctx)) == 1

    ctx = make_ctx(LEDGER, client_lints={"MISSING-DOCUMENT": {"enabled": False}})
    assert lint.evaluate(ctx) == []
