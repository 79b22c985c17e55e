"""Pedersen commitments over ristretto255 and balance proofs between them."""

from __future__ import annotations

import binascii
import functools
import hashlib
import os
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from .ristretto import ORDER, Point, scalar_reduce

_H_LABEL = b"GhostLedger_H_v1"
_SCALAR_SIZE = 32
_U64_LIMIT = 1 << 64


def g_point() -> Point:
    """The blinding generator G: the ristretto basepoint."""
    return Point.basepoint()


@functools.lru_cache(maxsize=None)
def h_point() -> Point:
    """The value generator H, hashed from a fixed label."""
    return Point.hash_from_bytes(_H_LABEL)


def _check_amount(amount: int) -> int:
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise TypeError("amount must be an integer")
    if not 0 <= amount < _U64_LIMIT:
        raise ValueError("amount must fit in 64 bits")
    return amount


def _unhex(text: str) -> bytes:
    try:
        return binascii.unhexlify(text)
    except (binascii.Error, TypeError) as exc:
        raise ValueError(f"invalid hex: {exc}") from exc


@dataclass(frozen=True)
class BlindingFactor:
    """A secret scalar that hides the amount in a commitment."""

    scalar: int = field(repr=False)

    def __post_init__(self) -> None:
        if not 0 <= self.scalar < ORDER:
            raise ValueError("blinding scalar out of range")

    @classmethod
    def random(cls) -> "BlindingFactor":
        return cls(scalar_reduce(os.urandom(64)))

    @classmethod
    def from_bytes(cls, data: bytes) -> "BlindingFactor":
        """Decode a canonical 32-byte little-endian scalar."""
        if len(data) != _SCALAR_SIZE:
            raise ValueError("blinding factor must be 32 bytes")
        value = int.from_bytes(data, "little")
        if value >= ORDER:
            raise ValueError("non-canonical blinding factor")
        return cls(value)

    @classmethod
    def from_hex(cls, s: str) -> "BlindingFactor":
        return cls.from_bytes(_unhex(s))

    def to_bytes(self) -> bytes:
        return self.scalar.to_bytes(_SCALAR_SIZE, "little")

    def to_hex(self) -> str:
        return self.to_bytes().hex()

    def __add__(self, other: object) -> "BlindingFactor":
        if not isinstance(other, BlindingFactor):
            return NotImplemented
        return BlindingFactor((self.scalar + other.scalar) % ORDER)


def _sum_scalars(blindings: Iterable[BlindingFactor]) -> int:
    return sum(b.scalar for b in blindings) % ORDER


@dataclass(frozen=True)
class Commitment:
    """A Pedersen commitment r*G + v*H, stored as its hex encoding."""

    point_hex: str

    @classmethod
    def _from_point(cls, point: Point) -> "Commitment":
        return cls(point.encode().hex())

    @classmethod
    def commit(cls, amount: int, blinding: BlindingFactor) -> "Commitment":
        value = _check_amount(amount)
        return cls._from_point(blinding.scalar * g_point() + value * h_point())

    @classmethod
    def zero(cls) -> "Commitment":
        return cls.commit(0, BlindingFactor(0))

    def verify(self, amount: int, blinding: BlindingFactor) -> bool:
        """True if this commitment opens to ``amount`` under ``blinding``."""
        return self.point_hex == Commitment.commit(amount, blinding).point_hex

    def _to_point(self) -> Point:
        return Point.decode(_unhex(self.point_hex))

    def add(self, other: "Commitment") -> "Commitment":
        """Homomorphic sum; raises ValueError if either side does not decode."""
        return Commitment._from_point(self._to_point() + other._to_point())

    def sub(self, other: "Commitment") -> "Commitment":
        """Homomorphic difference; raises ValueError if either side does not decode."""
        return Commitment._from_point(self._to_point() - other._to_point())


def _sum_points(commitments: Iterable[Commitment]) -> Point:
    total = Point.identity()
    for commitment in commitments:
        total = total + commitment._to_point()
    return total


@dataclass(frozen=True)
class BalanceProof:
    """Shows that inputs and outputs commit to equal totals."""

    excess_commitment_hex: str
    excess_signature_hex: str

    @classmethod
    def create(
        cls,
        input_blindings: Sequence[BlindingFactor],
        output_blindings: Sequence[BlindingFactor],
    ) -> "BalanceProof":
        excess = (_sum_scalars(input_blindings) - _sum_scalars(output_blindings)) % ORDER
        excess_bytes = (excess * g_point()).encode()
        challenge = scalar_reduce(hashlib.sha256(excess_bytes).digest())
        signature = challenge * excess % ORDER
        return cls(
            excess_commitment_hex=excess_bytes.hex(),
            excess_signature_hex=signature.to_bytes(_SCALAR_SIZE, "little").hex(),
        )

    def verify(
        self,
        input_commitments: Sequence[Commitment],
        output_commitments: Sequence[Commitment],
    ) -> bool:
        """True if sum(inputs) - sum(outputs) equals the excess point."""
        try:
            sum_in = _sum_points(input_commitments)
            sum_out = _sum_points(output_commitments)
            excess = Point.decode(_unhex(self.excess_commitment_hex))
        except ValueError:
            return False
        return sum_in - sum_out == excess


class PrivateTxBuilder:
    """Builds the commitments and balance proof of a one-input, two-output spend."""

    def __init__(self, input_amount: int, output_amount: int) -> None:
        _check_amount(input_amount)
        _check_amount(output_amount)
        if output_amount > input_amount:
            raise ValueError("output amount exceeds input amount")
        self.input_amount = input_amount
        self.output_amount = output_amount
        self.input_blinding = BlindingFactor.random()
        self.output_blinding = BlindingFactor.random()
        self.change_blinding = BlindingFactor.random()

    def input_commitment(self) -> Commitment:
        return Commitment.commit(self.input_amount, self.input_blinding)

    def output_commitment(self) -> Commitment:
        return Commitment.commit(self.output_amount, self.output_blinding)

    def change_commitment(self) -> Commitment:
        return Commitment.commit(self.input_amount - self.output_amount, self.change_blinding)

    def balance_proof(self) -> BalanceProof:
        return BalanceProof.create(
            [self.input_blinding],
            [self.output_blinding, self.change_blinding],
        )