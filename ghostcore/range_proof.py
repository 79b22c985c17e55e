"""Range proof interface and the experimental placeholder backend."""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from .commitments import BlindingFactor, Commitment


class RangeProofError(Exception):
    """Base class for range proof failures."""


class NotSupportedError(RangeProofError):
    def __init__(self) -> None:
        super().__init__("range proof not supported in this build")


class InvalidProofError(RangeProofError):
    def __init__(self, detail: str) -> None:
        super().__init__(f"invalid proof: {detail}")
        self.detail = detail


class InvalidCommitmentError(RangeProofError):
    def __init__(self, detail: str) -> None:
        super().__init__(f"invalid commitment: {detail}")
        self.detail = detail


class RangeProofSystem(ABC):
    """A backend that proves a committed amount lies in [0, 2^64)."""

    @classmethod
    @abstractmethod
    def prove(cls, amount: int, blinding: BlindingFactor, commitment: Commitment) -> Any:
        """Produce a proof; raise RangeProofError on failure."""

    @classmethod
    @abstractmethod
    def verify(cls, commitment: Commitment, proof: Any) -> None:
        """Return normally if the proof holds; raise RangeProofError otherwise."""

    @classmethod
    @abstractmethod
    def is_production_safe(cls) -> bool:
        """Whether the backend gives real soundness guarantees."""


@dataclass(frozen=True)
class PlaceholderProof:
    amount_bits: int
    experimental: bool


class PlaceholderRangeProof(RangeProofSystem):
    """A stand-in backend that marks every proof as experimental."""

    @classmethod
    def prove(
        cls, amount: int, blinding: BlindingFactor, commitment: Commitment
    ) -> PlaceholderProof:
        return PlaceholderProof(amount_bits=64, experimental=True)

    @classmethod
    def verify(cls, commitment: Commitment, proof: PlaceholderProof) -> None:
        if not proof.experimental:
            raise InvalidProofError("non-experimental proof not supported")

    @classmethod
    def is_production_safe(cls) -> bool:
        return False


class RangeProofStatus(enum.Enum):
    VERIFIED = "Verified"
    EXPERIMENTAL = "Experimental"
    MISSING = "Missing"

    def is_production_safe(self) -> bool:
        return self is RangeProofStatus.VERIFIED