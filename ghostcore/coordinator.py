"""Merging the ledger states of parallel branches by per-address quorum."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Protocol, Sequence


class BranchState(Protocol):
    balances: Mapping[str, int]
    nonces: Mapping[str, int]
    applied_txs: Iterable[str]


class BranchLike(Protocol):
    state: Any


def quorum_size(total: int) -> int:
    """Strict majority of ``total`` voters."""
    return total // 2 + 1


def quorum_value(votes: Sequence[int], quorum: int) -> int:
    """The most voted value if it reaches ``quorum``, else the smallest vote.

    Among values with equal counts the larger value is considered first.
    """
    if not votes:
        raise ValueError("no votes to choose from")
    ranked = sorted(Counter(votes).items(), key=lambda item: (item[1], item[0]), reverse=True)
    for value, count in ranked:
        if count >= quorum:
            return value
    return min(votes)


@dataclass
class MergedState:
    """The coordinator's view of the ledger after a merge."""

    balances: dict[str, int] = field(default_factory=dict)
    nonces: dict[str, int] = field(default_factory=dict)
    applied_txs: set[str] = field(default_factory=set)


def _votes(branches: Iterable[BranchLike], attribute: str, address: str) -> list[int]:
    return [
        getattr(branch.state, attribute)[address]
        for branch in branches
        if address in getattr(branch.state, attribute)
    ]


@dataclass
class Coordinator:
    """Holds the merged root state and counts merges performed."""

    root_state: MergedState = field(default_factory=MergedState)
    merge_count: int = 0

    def merge(self, branches: Sequence[BranchLike]) -> MergedState:
        """Rebuild the root state from the branches; no branches leaves it unchanged."""
        if not branches:
            return self.root_state

        quorum = quorum_size(len(branches))
        addresses = {address for branch in branches for address in branch.state.balances}

        merged = MergedState()
        for address in addresses:
            balance_votes = _votes(branches, "balances", address)
            if balance_votes:
                merged.balances[address] = quorum_value(balance_votes, quorum)
            nonce_votes = _votes(branches, "nonces", address)
            if nonce_votes:
                merged.nonces[address] = quorum_value(nonce_votes, quorum)

        for branch in branches:
            merged.applied_txs.update(branch.state.applied_txs)

        self.root_state = merged
        self.merge_count += 1
        return self.root_state

    def get_balance(self, address: str) -> int:
        return self.root_state.balances.get(address, 0)

    def has_quorum(self, branches: Sequence[BranchLike], address: str) -> bool:
        """True if some balance for ``address`` is held by a majority of branches."""
        votes = _votes(branches, "balances", address)
        if not votes:
            return False
        quorum = quorum_size(len(branches))
        return any(count >= quorum for count in Counter(votes).values())