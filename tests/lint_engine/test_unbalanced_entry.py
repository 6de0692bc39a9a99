from beanlint.lint_engine.lints.unbalanced_entry import UNBALANCED_ENTRY, find_unbalanced_entries


LEDGER = """
2000-01-01 open Assets:Bank:Account

2000-01-01 * "Lonely" ""
    Assets:Bank:Account  -1500 DKK

2000-01-02 * "Balanced" ""
    Assets:Bank:Account  -1500 DKK
    Assets:Bank:Savings
"""


def test_single_posting_transaction_is_flagged(inline_directives):
    unbalanced = find_unbalanced_entries(inline_directives(LEDGER))
    assert len(unbalanced) == 1
    assert unbalanced[0].entry.inner.payee == "Lonely"
    assert unbalanced[0].headline() == "unbalanced transaction Lonely:"


def test_single_location_renders_with_context(inline_directives):
    finding = find_unbalanced_entries(inline_directives(LEDGER))[0]
    assert finding.render() == (
        "warning: unbalanced transaction Lonely:\n"
        "--> <inline>:4-5\n"
        "     | \n"
        '   4 | 2000-01-01 * "Lonely" ""\n'
        "   5 |     Assets:Bank:Account  -1500 DKK\n"
        "     | \n"
        "\n"
    )


def test_lint_wrapper(make_ctx):
    findings = UNBALANCED_ENTRY().evaluate(make_ctx(LEDGER))
    assert len(findings) == 1
