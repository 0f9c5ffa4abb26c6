"""Full assembly simulation: overrides, counts and invariants."""

import pytest

from core.errors import ValidationError
from core.schema import CLASS_ORDER, Vote
from voting import VoteOverride, run_what_if, simulate_voting

from helpers import I, II, III, IV, make_creditor


def _invariants(result):
    for r in result.by_class.values():
        assert r.favor_count + r.against_count + r.abstain_count == r.present_count
        assert r.present_count <= r.total_creditors
        assert 0.0 <= r.quorum_by_head <= 100.0
        assert 0.0 <= r.quorum_by_value <= 100.0
        assert (r.approved is None) == (r.present_count == 0)
    present = [r for r in result.by_class.values() if r.present_count > 0]
    assert result.plan_approved == all(r.approved for r in present)
    assert result.approved_class_count + result.rejected_class_count == len(present)


def test_mixed_ledger_outcome(mixed_ledger):
    result = simulate_voting(mixed_ledger)
    _invariants(result)

    assert result.by_class[I].approved is True
    assert result.by_class[II].approved is False
    assert result.by_class[III].approved is False
    assert result.by_class[IV].approved is None
    assert result.plan_approved is False
    assert result.approved_class_count == 1
    assert result.rejected_class_count == 2
    assert result.summary.total_creditors == 11
    assert result.summary.total_present == 10


def test_every_class_reported(class_iii_example):
    result = simulate_voting(class_iii_example)
    assert set(result.by_class) == set(CLASS_ORDER)
    assert result.plan_approved is True
    assert result.approved_class_count == 1
    assert result.rejected_class_count == 0
    _invariants(result)


def test_absent_class_does_not_count(class_iii_example):
    extra = [make_creditor("l1", I, 10, Vote.AGAINST, present=False)]
    result = simulate_voting(class_iii_example + extra)
    assert result.by_class[I].approved is None
    assert result.plan_approved is True


def test_nobody_present_is_vacuously_approved():
    creditors = [make_creditor("a", I, 10, Vote.FAVOR, present=False)]
    result = simulate_voting(creditors)
    assert result.summary.total_present == 0
    assert result.approved_class_count == 0
    assert result.rejected_class_count == 0
    assert result.plan_approved is True
    assert result.cram_down.applicable is False


def test_empty_ledger_is_rejected():
    with pytest.raises(ValidationError):
        simulate_voting([])


def test_duplicate_ids_are_rejected():
    creditors = [make_creditor("a", I, 10, Vote.FAVOR), make_creditor("a", II, 10, Vote.FAVOR)]
    with pytest.raises(ValidationError) as exc:
        simulate_voting(creditors)
    assert "a" in str(exc.value)


def test_override_changes_vote_without_touching_ledger(mixed_ledger):
    result = simulate_voting(mixed_ledger, {"u3": VoteOverride(vote=Vote.FAVOR)})

    assert result.by_class[III].approved is True
    # ledger snapshot untouched
    assert next(c for c in mixed_ledger if c.id == "u3").vote is Vote.AGAINST
    assert simulate_voting(mixed_ledger).by_class[III].approved is False


def test_override_presence_only_keeps_vote(mixed_ledger):
    result = simulate_voting(mixed_ledger, {"m1": VoteOverride(present_at_assembly=True)})
    r = result.by_class[IV]
    assert r.present_count == 1
    assert r.favor_count == 1
    assert r.approved is True


def test_override_absence_removes_vote(mixed_ledger):
    result = simulate_voting(mixed_ledger, {"l3": VoteOverride(present_at_assembly=False)})
    r = result.by_class[I]
    assert r.present_count == 2
    assert r.against_count == 0
    assert r.quorum_by_head == 100.0


def test_explicit_none_vote_clears_it(mixed_ledger):
    result = simulate_voting(mixed_ledger, {"l3": VoteOverride(vote=None)})
    r = result.by_class[I]
    assert r.abstain_count == 1
    assert r.against_count == 0


def test_empty_override_is_a_no_op(mixed_ledger):
    base = simulate_voting(mixed_ledger)
    same = simulate_voting(mixed_ledger, {"l1": VoteOverride()})
    assert same.by_class == base.by_class


def test_unknown_override_id_is_reported_and_skipped(mixed_ledger, caplog):
    with caplog.at_level("WARNING"):
        result = simulate_voting(mixed_ledger, {"ghost": VoteOverride(vote=Vote.FAVOR)})

    assert [i.creditor_id for i in result.inconsistencies] == ["ghost"]
    assert "ghost" in caplog.text
    assert result.by_class == simulate_voting(mixed_ledger).by_class


def test_what_if_replaces_one_override(mixed_ledger):
    base = {"u3": VoteOverride(vote=Vote.FAVOR)}
    result = run_what_if(mixed_ledger, base, "u3", Vote.AGAINST, True)
    assert result.by_class[III].approved is False
    # base overrides not mutated
    assert base["u3"].vote is Vote.FAVOR


def test_to_dataframe_has_one_row_per_class(mixed_ledger):
    df = simulate_voting(mixed_ledger).to_dataframe()
    assert list(df["class"]) == [c.value for c in CLASS_ORDER]
    assert df.loc[df["class"] == "IV_SMALL_BUSINESS", "approved"].iloc[0] is None


@pytest.mark.parametrize("seed", range(5))
def test_invariants_hold_on_generated_ledgers(seed):
    import random

    rng = random.Random(seed)
    votes = [Vote.FAVOR, Vote.AGAINST, Vote.ABSTAIN, None]
    classes = [I, II, III, IV]
    creditors = [
        make_creditor(
            f"c{i}",
            rng.choice(classes),
            rng.randint(0, 1_000_000),
            rng.choice(votes),
            present=rng.random() < 0.7,
        )
        for i in range(40)
    ]
    _invariants(simulate_voting(creditors))
