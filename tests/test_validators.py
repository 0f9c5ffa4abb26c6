"""Ledger data-quality checks."""

from data_prep import validate_ledger

from helpers import I, III, make_creditor


def _row(cid, **kw):
    row = {"id": cid, "class": "III_UNSECURED", "value": 1_000, "vote": "FAVOR", "present_at_assembly": True}
    row.update(kw)
    return row


def test_clean_ledger_passes():
    result = validate_ledger([_row("a"), _row("b", vote="AGAINST")])
    assert result.is_valid
    assert result.warnings == []
    assert [c.id for c in result.creditors] == ["a", "b"]
    assert "All checks passed" in result.summary()


def test_empty_ledger():
    result = validate_ledger([])
    assert not result.is_valid
    assert "empty" in result.errors[0]


def test_schema_errors_name_the_row():
    result = validate_ledger([_row("a"), _row("bad", value=-5), _row("worse", **{"class": "V_OTHER"})])
    assert not result.is_valid
    assert any(e.startswith("bad:") for e in result.errors)
    assert any(e.startswith("worse:") for e in result.errors)
    assert [c.id for c in result.creditors] == ["a"]


def test_fractional_cents_rejected():
    result = validate_ledger([_row("a", value=10.5)])
    assert not result.is_valid


def test_duplicate_ids():
    result = validate_ledger([_row("a"), _row("a")])
    assert not result.is_valid
    assert "duplicate" in result.errors[0]


def test_models_are_accepted_as_is():
    creditors = [make_creditor("a", I, 10), make_creditor("b", III, 20)]
    result = validate_ledger(creditors)
    assert result.creditors == creditors


def test_vote_presence_warnings():
    result = validate_ledger([
        _row("a", present_at_assembly=False),
        _row("b", vote=None),
        _row("c", vote="ABSTAIN"),
        _row("d", value=0),
    ])
    assert result.is_valid
    text = "\n".join(result.warnings)
    assert "1 absent creditors have a recorded vote" in text
    assert "1 present creditors have no vote" in text
    assert "1 present creditors abstained" in text
    assert "1 creditors have a zero claim value" in text
    assert "WARNINGS (4)" in result.summary()
