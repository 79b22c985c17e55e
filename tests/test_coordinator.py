from types import SimpleNamespace

import pytest

from ghostcore.coordinator import Coordinator, quorum_size, quorum_value


def make_branch(balances=(), nonces=(), applied=()):
    state = SimpleNamespace(
        balances=dict(balances), nonces=dict(nonces), applied_txs=set(applied)
    )
    return SimpleNamespace(state=state)


def test_quorum_size_odd():
    assert quorum_size(5) == 3
    assert quorum_size(3) == 2


def test_quorum_size_even():
    assert quorum_size(4) == 3
    assert quorum_size(2) == 2


def test_quorum_value_clear_winner():
    assert quorum_value([900, 900, 900, 850, 800], 3) == 900


def test_quorum_value_fallback_to_min():
    assert quorum_value([900, 850, 800], 2) == 800


def test_quorum_value_two_branches_agree():
    assert quorum_value([500, 500], 2) == 500


def test_quorum_value_empty_raises():
    with pytest.raises(ValueError):
        quorum_value([], 1)


def test_merge_balances():
    coord = Coordinator()
    coord.merge([make_branch({"alice": 500}), make_branch({"bob": 300})])
    assert coord.get_balance("alice") == 500
    assert coord.get_balance("bob") == 300


def test_merge_quorum_majority_wins():
    branches = [make_branch({"alice": 900}) for _ in range(4)]
    branches.append(make_branch({"alice": 500}))
    coord = Coordinator()
    coord.merge(branches)
    assert coord.get_balance("alice") == 900


def test_merge_no_quorum_uses_min():
    coord = Coordinator()
    coord.merge(
        [make_branch({"alice": 1000}), make_branch({"alice": 800}), make_branch({"alice": 600})]
    )
    assert coord.get_balance("alice") == 600


def test_merge_count_increments():
    branch = make_branch({"alice": 100})
    coord = Coordinator()
    coord.merge([branch])
    coord.merge([branch])
    assert coord.merge_count == 2


def test_merge_empty_leaves_state_alone():
    coord = Coordinator()
    coord.merge([make_branch({"alice": 100})])
    result = coord.merge([])
    assert coord.merge_count == 1
    assert result.balances == {"alice": 100}


def test_merge_nonces_and_applied_txs():
    a = make_branch({"alice": 10}, {"alice": 3}, {"t1", "t2"})
    b = make_branch({"alice": 10}, {"alice": 3}, {"t2", "t3"})
    c = make_branch({"alice": 10}, {"alice": 2}, {"t4"})
    coord = Coordinator()
    state = coord.merge([a, b, c])
    assert state.nonces == {"alice": 3}
    assert state.applied_txs == {"t1", "t2", "t3", "t4"}


def test_get_balance_unknown_is_zero():
    assert Coordinator().get_balance("nobody") == 0


def test_has_quorum_true():
    branches = [make_branch({"alice": 900}), make_branch({"alice": 900}), make_branch({"alice": 850})]
    assert Coordinator().has_quorum(branches, "alice") is True


def test_has_quorum_false():
    branches = [make_branch({"alice": 900}), make_branch({"alice": 800}), make_branch({"alice": 700})]
    assert Coordinator().has_quorum(branches, "alice") is False


def test_has_quorum_unknown_address():
    assert Coordinator().has_quorum([make_branch({"alice": 1})], "bob") is False