"""Per-class quorum rules (art. 45)."""

import pytest

from core.schema import Vote
from voting.progress import quorum_progress
from voting.quorum import ClassTally, calculate_class_quorum

from helpers import I, II, III, IV, make_creditor


def test_class_iii_example_approved_by_head_and_value(class_iii_example):
    r = calculate_class_quorum(III, class_iii_example)

    assert r.total_creditors == 10
    assert r.present_count == 6
    assert r.favor_count == 4
    assert r.against_count == 2
    assert r.abstain_count == 0
    assert r.favor_value == 600
    assert r.present_value == 1_000
    assert r.quorum_by_value == pytest.approx(60.0)
    assert r.quorum_by_head == pytest.approx(66.6667, abs=1e-3)
    assert r.approved is True


@pytest.mark.parametrize("cls", [I, IV])
def test_head_classes_ignore_value(cls):
    creditors = [
        make_creditor("a", cls, 1, Vote.FAVOR),
        make_creditor("b", cls, 1, Vote.FAVOR),
        make_creditor("c", cls, 1_000_000, Vote.AGAINST),
    ]
    r = calculate_class_quorum(cls, creditors)
    assert r.quorum_by_value < 1
    assert r.approved is True


@pytest.mark.parametrize("cls", [II, III])
def test_dual_classes_need_value_majority(cls):
    creditors = [
        make_creditor("a", cls, 1, Vote.FAVOR),
        make_creditor("b", cls, 1, Vote.FAVOR),
        make_creditor("c", cls, 1_000_000, Vote.AGAINST),
    ]
    assert calculate_class_quorum(cls, creditors).approved is False


@pytest.mark.parametrize("cls", [II, III])
def test_dual_classes_need_head_majority(cls):
    creditors = [
        make_creditor("a", cls, 1_000_000, Vote.FAVOR),
        make_creditor("b", cls, 1, Vote.AGAINST),
        make_creditor("c", cls, 1, Vote.AGAINST),
    ]
    r = calculate_class_quorum(cls, creditors)
    assert r.quorum_by_value > 99
    assert r.approved is False


def test_exact_half_is_not_a_majority():
    creditors = [
        make_creditor("a", I, 10, Vote.FAVOR),
        make_creditor("b", I, 10, Vote.AGAINST),
    ]
    r = calculate_class_quorum(I, creditors)
    assert r.quorum_by_head == 50.0
    assert r.approved is False


def test_nobody_present_gives_none():
    creditors = [make_creditor("a", I, 10, Vote.FAVOR, present=False)]
    r = calculate_class_quorum(I, creditors)
    assert r.present_count == 0
    assert r.approved is None
    assert r.quorum_by_head == 0.0
    assert r.quorum_by_value == 0.0


def test_abstentions_stay_out_of_the_denominator():
    creditors = [
        make_creditor("a", III, 100, Vote.FAVOR),
        make_creditor("b", III, 50, Vote.AGAINST),
        make_creditor("e", III, 10, Vote.FAVOR),
        make_creditor("c", III, 5_000, Vote.ABSTAIN),
        make_creditor("d", III, 5_000, None),  # present, no vote recorded
    ]
    r = calculate_class_quorum(III, creditors)
    assert r.present_count == 5
    assert r.abstain_count == 2
    assert r.favor_count + r.against_count + r.abstain_count == r.present_count
    assert r.present_value == 10_160
    assert r.quorum_by_value == pytest.approx(100 * 110 / 160)
    assert r.approved is True


def test_all_abstaining_class_is_rejected():
    creditors = [make_creditor("a", I, 10, Vote.ABSTAIN)]
    r = calculate_class_quorum(I, creditors)
    assert r.present_count == 1
    assert r.quorum_by_head == 0.0
    assert r.approved is False


def test_other_classes_are_not_counted():
    creditors = [
        make_creditor("a", I, 10, Vote.FAVOR),
        make_creditor("b", II, 10, Vote.AGAINST),
    ]
    assert calculate_class_quorum(I, creditors).total_creditors == 1


def test_flip_outcome_matches_full_recount():
    creditors = [
        make_creditor("a", III, 400, Vote.FAVOR),
        make_creditor("b", III, 100, Vote.FAVOR),
        make_creditor("c", III, 450, Vote.AGAINST),
    ]
    tally = ClassTally.from_creditors(III, creditors)
    for i, c in enumerate(creditors):
        flipped_vote = Vote.AGAINST if c.vote is Vote.FAVOR else Vote.FAVOR
        recount = list(creditors)
        recount[i] = c.model_copy(update={"vote": flipped_vote})
        assert tally.approved_if_flipped(c) == calculate_class_quorum(III, recount).approved


def test_flip_rejects_abstainers():
    c = make_creditor("a", I, 10, Vote.ABSTAIN)
    tally = ClassTally.from_creditors(I, [c])
    with pytest.raises(ValueError):
        tally.approved_if_flipped(c)


def test_quorum_progress_head_class():
    creditors = [
        make_creditor("a", I, 10, Vote.FAVOR),
        make_creditor("b", I, 10, Vote.AGAINST),
        make_creditor("c", I, 10, Vote.AGAINST),
    ]
    progress = quorum_progress(calculate_class_quorum(I, creditors))
    assert progress.heads_needed == 2
    assert progress.heads_missing == 1
    assert progress.progress_pct == pytest.approx(33.3333, abs=1e-3)


def test_quorum_progress_dual_class_uses_weaker_metric(class_iii_example):
    progress = quorum_progress(calculate_class_quorum(III, class_iii_example))
    assert progress.value_needed == 501
    assert progress.value_missing == 0
    assert progress.heads_missing == 0
    assert progress.progress_pct == pytest.approx(60.0)
