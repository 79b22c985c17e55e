"""Conflict lifecycle states, checkpoint anchors, closure outcomes and scoring.

A conflict is a set of transactions that share a sender and a nonce. Each
conflict moves through a small state machine: it starts pending, becomes
ready once every member is heavy enough, closes locally against a finalized
checkpoint, and may be re-opened for reconciliation after a partition heals
before closing globally.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Protocol, Sequence

RESOLUTION_MIN_WEIGHT = 3
MAX_STAKE_INFLUENCE = 3.0
CLOSURE_SIGMA = 2.0
CHECKPOINT_MIN_WEIGHT = 6


class DagView(Protocol):
    """What this module needs from a DAG."""

    def get_transaction(self, tx_id: str) -> Any: ...

    def descendants_of(self, tx_id: str) -> Iterable[str]: ...


class StatusKind(enum.Enum):
    PENDING = "pending"
    READY = "ready"
    CLOSED_LOCAL = "closed_local"
    RECONCILING = "reconciling"
    CLOSED_GLOBAL = "closed_global"


_ALLOWED_TRANSITIONS = frozenset(
    {
        (StatusKind.PENDING, StatusKind.READY),
        (StatusKind.PENDING, StatusKind.CLOSED_LOCAL),
        (StatusKind.READY, StatusKind.CLOSED_LOCAL),
        (StatusKind.CLOSED_LOCAL, StatusKind.RECONCILING),
        (StatusKind.RECONCILING, StatusKind.CLOSED_GLOBAL),
        (StatusKind.RECONCILING, StatusKind.READY),
    }
)

_CLOSED_KINDS = frozenset({StatusKind.CLOSED_LOCAL, StatusKind.CLOSED_GLOBAL})


@dataclass(frozen=True)
class ConflictStatus:
    """A conflict's state; closed states carry the winning transaction id."""

    kind: StatusKind
    winner: str | None = None

    def __post_init__(self) -> None:
        if (self.kind in _CLOSED_KINDS) != (self.winner is not None):
            raise ValueError("only closed statuses carry a winner")

    @classmethod
    def pending(cls) -> "ConflictStatus":
        return cls(StatusKind.PENDING)

    @classmethod
    def ready(cls) -> "ConflictStatus":
        return cls(StatusKind.READY)

    @classmethod
    def closed_local(cls, winner: str) -> "ConflictStatus":
        return cls(StatusKind.CLOSED_LOCAL, winner)

    @classmethod
    def reconciling(cls) -> "ConflictStatus":
        return cls(StatusKind.RECONCILING)

    @classmethod
    def closed_global(cls, winner: str) -> "ConflictStatus":
        return cls(StatusKind.CLOSED_GLOBAL, winner)

    def is_globally_final(self) -> bool:
        return self.kind is StatusKind.CLOSED_GLOBAL

    def is_any_closed(self) -> bool:
        return self.kind in _CLOSED_KINDS

    def can_transition_to(self, next_status: "ConflictStatus") -> bool:
        return (self.kind, next_status.kind) in _ALLOWED_TRANSITIONS


class InvalidTransitionError(RuntimeError):
    """Raised when a partition state is moved along a forbidden edge."""


@dataclass
class PartitionState:
    """Per-conflict state plus the anchors and stake frozen at local closure."""

    status: ConflictStatus = field(default_factory=ConflictStatus.pending)
    local_anchor_id: str | None = None
    global_anchor_id: str | None = None
    frozen_stake: dict[str, float] | None = None
    frozen_total_stake: float = 0.0

    def _require(self, kind: StatusKind, action: str) -> None:
        if self.status.kind is not kind:
            raise InvalidTransitionError(
                f"{action} called on {self.status.kind.value} status"
            )

    def set_closed_local(
        self,
        winner: str,
        anchor_id: str,
        stake_at_cp: Mapping[str, float],
        total_at_cp: float,
    ) -> None:
        """Close locally and freeze the stake distribution seen at the anchor."""
        nxt = ConflictStatus.closed_local(winner)
        if not self.status.can_transition_to(nxt):
            raise InvalidTransitionError(
                f"invalid transition: {self.status.kind.value} -> closed_local"
            )
        self.status = nxt
        self.local_anchor_id = anchor_id
        self.frozen_stake = dict(stake_at_cp)
        self.frozen_total_stake = total_at_cp

    def downgrade_to_reconciling(self) -> None:
        self._require(StatusKind.CLOSED_LOCAL, "downgrade_to_reconciling")
        self.status = ConflictStatus.reconciling()

    def set_closed_global(self, winner: str, global_anchor_id: str) -> None:
        self._require(StatusKind.RECONCILING, "set_closed_global")
        self.global_anchor_id = global_anchor_id
        self.status = ConflictStatus.closed_global(winner)

    def reconciling_to_ready(self) -> None:
        self._require(StatusKind.RECONCILING, "reconciling_to_ready")
        self.status = ConflictStatus.ready()


@dataclass
class CheckpointAnchor:
    """A checkpoint together with the set of transactions that descend from it."""

    checkpoint_id: str
    dag_height: int
    weight: int
    _descendants: set[str] = field(default_factory=set, repr=False)

    @classmethod
    def from_dag(
        cls, checkpoint_id: str, dag_height: int, weight: int, dag: DagView
    ) -> "CheckpointAnchor":
        return cls(checkpoint_id, dag_height, weight, set(dag.descendants_of(checkpoint_id)))

    def refresh(self, dag: DagView) -> None:
        """Recompute the descendant set from the current DAG."""
        self._descendants = set(dag.descendants_of(self.checkpoint_id))

    def is_finalized(self) -> bool:
        return self.weight >= CHECKPOINT_MIN_WEIGHT

    def is_ancestor_of(self, tx_id: str) -> bool:
        return tx_id in self._descendants

    def register_descendant(self, tx_id: str) -> None:
        self._descendants.add(tx_id)

    def descendant_count(self) -> int:
        return len(self._descendants)


class ClosureKind(enum.Enum):
    NOT_CONFLICT = "not_conflict"
    ALREADY_RESOLVED = "already_resolved"
    NOT_READY = "not_ready"
    NOT_ANCHORED = "not_anchored"
    NOT_DOMINANT = "not_dominant"
    CLOSED = "closed"
    INSUFFICIENT_DATA = "insufficient_data"


@dataclass(frozen=True)
class ClosureResult:
    """Outcome of evaluating whether a conflict can close.

    ``winner`` is the resolved winner, the closing winner, or the current
    leader when it is not yet dominant. ``score`` is that transaction's score.
    """

    kind: ClosureKind
    winner: str | None = None
    pending_ids: tuple[str, ...] = ()
    score: float | None = None
    second_score: float | None = None
    required_ratio: float | None = None

    def is_closed(self) -> bool:
        return self.kind is ClosureKind.CLOSED


def compute_scores(
    dag: DagView,
    ids: Iterable[str],
    stake_weights: Mapping[str, float],
    total_stake: float,
) -> list[tuple[str, float]]:
    """Score each known transaction by weight, boosted by its sender's stake share."""
    scores: list[tuple[str, float]] = []
    for tx_id in ids:
        tx = dag.get_transaction(tx_id)
        if tx is None:
            continue
        stake = stake_weights.get(tx.sender, 0.0)
        ratio = min(max(stake / total_stake, 0.0), 1.0) if total_stake > 0.0 else 0.0
        multiplier = 1.0 + ratio * (MAX_STAKE_INFLUENCE - 1.0)
        scores.append((tx_id, float(tx.weight) * multiplier))
    return scores


def pick_winner(scores: Sequence[tuple[str, float]]) -> tuple[str, float] | None:
    """Highest score wins; equal scores go to the lexicographically smallest id."""
    best: tuple[str, float] | None = None
    for tx_id, score in scores:
        if best is None:
            best = (tx_id, score)
            continue
        best_id, best_score = best
        if score > best_score or (not score < best_score and tx_id < best_id):
            best = (tx_id, score)
    return best