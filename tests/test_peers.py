import pytest

from ghostcore.peers import (
    extract_subnet,
    is_subnet_allowed,
    select_stem_peer,
    stem_index,
)


@pytest.mark.parametrize(
    "address",
    ["ws://10.20.30.40:9000", "wss://10.20.30.40:9000", "10.20.30.40"],
)
def test_extract_subnet_ipv4(address):
    assert extract_subnet(address) == "10.20"


@pytest.mark.parametrize(
    "address",
    ["ws://localhost:9000", "ws://300.1.1.1:9000", "ws://1.2.3:9000", "ws://a.b.c.d:1"],
)
def test_extract_subnet_none(address):
    assert extract_subnet(address) is None


def test_small_peer_list_always_allowed():
    peers = [f"ws://10.0.0.{i}:9000" for i in range(4)]
    assert is_subnet_allowed(peers, "ws://10.0.0.99:9000") is True


def test_dominant_subnet_rejected():
    peers = [f"ws://10.0.0.{i}:9000" for i in range(5)]
    assert is_subnet_allowed(peers, "ws://10.0.0.99:9000") is False


def test_diverse_subnet_allowed():
    peers = [f"ws://{i}.1.0.1:9000" for i in range(1, 6)]
    assert is_subnet_allowed(peers, "ws://99.1.0.1:9000") is True


def test_non_ip_address_allowed():
    peers = [f"ws://10.0.0.{i}:9000" for i in range(6)]
    assert is_subnet_allowed(peers, "ws://node.example.com:9000") is True


def test_stem_index_in_range_and_deterministic():
    for count in range(1, 8):
        first = stem_index("abcdef0123", count, now=1_000)
        assert 0 <= first < count
        assert stem_index("abcdef0123", count, now=1_000) == first


def test_stem_index_stable_within_ten_seconds():
    assert stem_index("tx42", 97, now=120) == stem_index("tx42", 97, now=129)


def test_stem_index_requires_candidates():
    with pytest.raises(ValueError):
        stem_index("tx", 0, now=0)


def test_select_stem_peer_excludes():
    peers = ["ws://a", "ws://b", "ws://c"]
    for now in range(0, 200, 10):
        chosen = select_stem_peer("txid", peers, exclude="ws://b", now=now)
        assert chosen in {"ws://a", "ws://c"}


def test_select_stem_peer_none_when_only_excluded():
    assert select_stem_peer("txid", ["ws://a"], exclude="ws://a", now=0) is None


def test_select_stem_peer_empty():
    assert select_stem_peer("txid", [], now=0) is None