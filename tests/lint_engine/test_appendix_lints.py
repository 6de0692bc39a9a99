from beanlint.lint_engine.appendix import Appendix, AppendixNotFoundError
from beanlint.lint_engine.lints.duplicate_appendix import DUPLICATE_APPENDIX_ID, find_duplicate_appendix_ids
from beanlint.lint_engine.lints.missing_appendix import MISSING_APPENDIX, find_missing_appendices
from beanlint.lint_engine.lints.nonsequential_appendix import (
    NONSEQUENTIAL_APPENDIX,
    find_nonsequential_appendices,
)


def _invoices(*statements):
    """Build one "Invoice" transaction per statement, newest first; None leaves it out."""
    blocks = []
    for day, statement in zip(range(len(statements), 0, -1), statements):
        lines = [f'2000-01-{day:02d} * "Invoice" ""']
        if statement is not None:
            lines.append(f'    statement: "{statement}"')
        lines += ["    Assets:Bank:Account  -1500 DKK", "    Expenses:Utilities:Power"]
        blocks.append("\n".join(lines) + "\n")
    return "\n".join(blocks)


def test_missing_appendices(inline_directives, extractor):
    text = _invoices(
        "documents/2022-01-04.3.invoice.pdf",
        None,
        "documents/2022-01-02.2.invoice.pdf",
        None,
    )
    missing = find_missing_appendices(inline_directives(text), extractor)
    assert len(missing) == 2
    assert [m.entry.inner.date.day for m in missing] == [3, 1]
    assert missing[0].headline() == "transaction Invoice does not have an appendix attached:"


def test_malformed_statement_is_not_a_missing_appendix(inline_directives, extractor):
    text = _invoices("documents/2022-01-01.HELLO.invoice.pdf")
    assert find_missing_appendices(inline_directives(text), extractor) == []


def test_duplicate_appendix_ids(inline_directives, extractor):
    text = _invoices(
        "documents/2022-01-04.3.invoice.pdf",
        "documents/2022-01-03.2.invoice.pdf",
        "documents/2022-01-02.2.invoice.pdf",
        "documents/2022-01-01.1.invoice.pdf",
    )
    duplicates = find_duplicate_appendix_ids(inline_directives(text), extractor)
    assert len(duplicates) == 1

    duplicate = duplicates[0]
    assert duplicate.appendix_id == 2
    assert len(duplicate.locations()) == 2
    assert duplicate.headline() == (
        "appendix id 2 is used in transactions Invoice and Invoice, "
        "but the appendices themselves are not the same."
    )


def test_same_statement_shared_by_transactions_is_fine(inline_directives, extractor):
    text = _invoices(
        "documents/2022-01-02.2.invoice.pdf",
        "documents/2022-01-02.2.invoice.pdf",
        "documents/2022-01-01.1.invoice.pdf",
    )
    assert find_duplicate_appendix_ids(inline_directives(text), extractor) == []


def test_nonsequential_appendix(inline_directives, extractor):
    text = _invoices(
        "documents/2022-01-04.5.invoice.pdf",
        "documents/2022-01-03.4.invoice.pdf",
        "documents/2022-01-02.2.invoice.pdf",
        "documents/2022-01-01.1.invoice.pdf",
    )
    gaps = find_nonsequential_appendices(inline_directives(text), extractor)
    assert len(gaps) == 1

    gap = gaps[0]
    assert (gap.before.appendix.id, gap.after.appendix.id) == (2, 4)
    assert gap.headline() == "nonsequential appendix ids between Invoice and Invoice (2 --> 4):"
    # Both sites are adjacent, so they render in one block.
    assert len(gap.spans()) == 1


def test_sequential_ids_with_repeats_have_no_gap(inline_directives, extractor):
    text = _invoices(
        "documents/2022-01-03.2.invoice.pdf",
        "documents/2022-01-02.2.invoice.pdf",
        "documents/2022-01-01.1.invoice.pdf",
    )
    assert find_nonsequential_appendices(inline_directives(text), extractor) == []


def test_appendix_lints_use_context_extractor(make_ctx):
    text = """
    2000-01-01 * "Receipt" ""
        receipt: 1
        Expenses:Food  1 DKK
        Assets:Cash

    2000-01-02 * "Receipt" ""
        receipt: 3
        Expenses:Food  1 DKK
        Assets:Cash

    2000-01-03 * "No receipt" ""
        Expenses:Food  1 DKK
        Assets:Cash
    """

    class ReceiptExtractor:
        def extract(self, transaction):
            value = transaction.inner.meta.get("receipt")
            if value is None:
                raise AppendixNotFoundError()
            return Appendix(id=int(value), statement=str(value))

    ctx = make_ctx(text, extractor=ReceiptExtractor())
    assert len(MISSING_APPENDIX().evaluate(ctx)) == 1
    assert len(NONSEQUENTIAL_APPENDIX().evaluate(ctx)) == 1
    assert DUPLICATE_APPENDIX_ID().evaluate(ctx) == []
