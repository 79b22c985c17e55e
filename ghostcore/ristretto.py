"""The ristretto255 prime-order group over edwards25519.

Points are held in extended twisted Edwards coordinates (X, Y, Z, T) with
x = X/Z, y = Y/Z and T = XY/Z. Scalars are plain integers taken modulo the
group order.
"""

from __future__ import annotations

import hashlib

P = 2**255 - 19
ORDER = 2**252 + 27742317777372353535851937790883648493

_ENCODED_SIZE = 32
_UNIFORM_SIZE = 64
_LOW_255_BITS = (1 << 255) - 1


def _inv(x: int) -> int:
    return pow(x, P - 2, P)


def _is_negative(x: int) -> bool:
    return bool((x % P) & 1)


def _abs(x: int) -> int:
    x %= P
    return (P - x) % P if x & 1 else x


D = (-121665 * _inv(121666)) % P
SQRT_M1 = pow(2, (P - 1) // 4, P)


def _sqrt_ratio_m1(u: int, v: int) -> tuple[bool, int]:
    """Return (was_square, r) with r the non-negative root of u/v or of i*u/v."""
    u %= P
    v %= P
    v3 = v * v % P * v % P
    v7 = v3 * v3 % P * v % P
    r = u * v3 % P * pow(u * v7 % P, (P - 5) // 8, P) % P
    check = v * r % P * r % P
    correct_sign = check == u
    flipped_sign = check == (-u) % P
    flipped_sign_i = check == (-u * SQRT_M1) % P
    if flipped_sign or flipped_sign_i:
        r = r * SQRT_M1 % P
    return correct_sign or flipped_sign, _abs(r)


SQRT_AD_MINUS_ONE = (P - _sqrt_ratio_m1(-D - 1, 1)[1]) % P
INVSQRT_A_MINUS_D = _sqrt_ratio_m1(1, -1 - D)[1]
ONE_MINUS_D_SQ = (1 - D * D) % P
D_MINUS_ONE_SQ = (D - 1) * (D - 1) % P

_D2 = 2 * D % P


def scalar_reduce(data: bytes) -> int:
    """Interpret little-endian ``data`` as an integer and reduce it modulo the group order."""
    return int.from_bytes(data, "little") % ORDER


class Point:
    """An element of the ristretto255 group."""

    __slots__ = ("_x", "_y", "_z", "_t")

    def __init__(self, x: int, y: int, z: int, t: int) -> None:
        self._x = x % P
        self._y = y % P
        self._z = z % P
        self._t = t % P

    @classmethod
    def identity(cls) -> "Point":
        return cls(0, 1, 1, 0)

    @classmethod
    def basepoint(cls) -> "Point":
        return _BASEPOINT

    @classmethod
    def decode(cls, data: bytes) -> "Point":
        """Decode a canonical 32-byte encoding; raise ValueError if it is not one."""
        if len(data) != _ENCODED_SIZE:
            raise ValueError("ristretto encoding must be 32 bytes")
        s = int.from_bytes(data, "little")
        if s >= P or _is_negative(s):
            raise ValueError("non-canonical ristretto encoding")
        ss = s * s % P
        u1 = (1 - ss) % P
        u2 = (1 + ss) % P
        u2_sqr = u2 * u2 % P
        v = (-(D * u1 % P * u1) - u2_sqr) % P
        was_square, invsqrt = _sqrt_ratio_m1(1, v * u2_sqr)
        den_x = invsqrt * u2 % P
        den_y = invsqrt * den_x % P * v % P
        x = _abs(2 * s * den_x)
        y = u1 * den_y % P
        t = x * y % P
        if not was_square or _is_negative(t) or y == 0:
            raise ValueError("invalid ristretto encoding")
        return cls(x, y, 1, t)

    @classmethod
    def from_uniform_bytes(cls, data: bytes) -> "Point":
        """Map 64 uniformly random bytes to a group element."""
        if len(data) != _UNIFORM_SIZE:
            raise ValueError("uniform input must be 64 bytes")
        first = _elligator(int.from_bytes(data[:32], "little") & _LOW_255_BITS)
        second = _elligator(int.from_bytes(data[32:], "little") & _LOW_255_BITS)
        return first + second

    @classmethod
    def hash_from_bytes(cls, data: bytes) -> "Point":
        """Hash arbitrary bytes to a group element through SHA-512."""
        return cls.from_uniform_bytes(hashlib.sha512(data).digest())

    def encode(self) -> bytes:
        """Return the canonical 32-byte encoding."""
        x0, y0, z0, t0 = self._x, self._y, self._z, self._t
        u1 = (z0 + y0) * (z0 - y0) % P
        u2 = x0 * y0 % P
        _, invsqrt = _sqrt_ratio_m1(1, u1 * u2 % P * u2)
        den1 = invsqrt * u1 % P
        den2 = invsqrt * u2 % P
        z_inv = den1 * den2 % P * t0 % P
        if _is_negative(t0 * z_inv):
            x = y0 * SQRT_M1 % P
            y = x0 * SQRT_M1 % P
            den_inv = den1 * INVSQRT_A_MINUS_D % P
        else:
            x, y = x0, y0
            den_inv = den2
        if _is_negative(x * z_inv):
            y = (-y) % P
        s = _abs(den_inv * (z0 - y))
        return s.to_bytes(_ENCODED_SIZE, "little")

    def __add__(self, other: object) -> "Point":
        if not isinstance(other, Point):
            return NotImplemented
        a = (self._y - self._x) * (other._y - other._x) % P
        b = (self._y + self._x) * (other._y + other._x) % P
        c = self._t * _D2 % P * other._t % P
        d = self._z * 2 * other._z % P
        e, f, g, h = b - a, d - c, d + c, b + a
        return Point(e * f, g * h, f * g, e * h)

    def __neg__(self) -> "Point":
        return Point(-self._x, self._y, self._z, -self._t)

    def __sub__(self, other: object) -> "Point":
        if not isinstance(other, Point):
            return NotImplemented
        return self + (-other)

    def __mul__(self, scalar: object) -> "Point":
        if not isinstance(scalar, int) or isinstance(scalar, bool):
            return NotImplemented
        k = scalar % ORDER
        result = Point.identity()
        addend = self
        while k:
            if k & 1:
                result = result + addend
            addend = addend + addend
            k >>= 1
        return result

    def __rmul__(self, scalar: object) -> "Point":
        return self.__mul__(scalar)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Point):
            return NotImplemented
        return (
            self._x * other._y % P == self._y * other._x % P
            or self._y * other._y % P == self._x * other._x % P
        )

    def __hash__(self) -> int:
        return hash(self.encode())

    def __repr__(self) -> str:
        return f"Point({self.encode().hex()})"


def _elligator(t: int) -> Point:
    t %= P
    r = SQRT_M1 * t % P * t % P
    u = (r + 1) * ONE_MINUS_D_SQ % P
    v = (-1 - r * D) * (r + D) % P
    was_square, s = _sqrt_ratio_m1(u, v)
    if was_square:
        c = P - 1
    else:
        s = (-_abs(s * t)) % P
        c = r
    n = (c * (r - 1) % P * D_MINUS_ONE_SQ - v) % P
    s_sq = s * s % P
    w0 = 2 * s * v % P
    w1 = n * SQRT_AD_MINUS_ONE % P
    w2 = (1 - s_sq) % P
    w3 = (1 + s_sq) % P
    return Point(w0 * w3, w2 * w1, w1 * w3, w0 * w2)


def _make_basepoint() -> Point:
    y = 4 * _inv(5) % P
    yy = y * y % P
    _, x = _sqrt_ratio_m1(yy - 1, D * yy + 1)
    return Point(x, y, 1, x * y)


_BASEPOINT = _make_basepoint()