"""Peer selection rules: subnet diversity and Dandelion stem routing."""

from __future__ import annotations

import time
from typing import Collection, Iterable

MIN_PEERS_FOR_DIVERSITY = 5
MAX_SUBNET_RATIO = 0.60
STEM_MAX_TTL = 10

_U64_MASK = (1 << 64) - 1


def _strip_repeated(text: str, prefix: str) -> str:
    while prefix and text.startswith(prefix):
        text = text[len(prefix):]
    return text


def _is_octet(part: str) -> bool:
    digits = part[1:] if part.startswith("+") else part
    return digits.isascii() and digits.isdigit() and int(digits) <= 255


def extract_subnet(address: str) -> str | None:
    """The first two octets of an IPv4 peer address, or None for other hosts."""
    host = _strip_repeated(_strip_repeated(address, "wss://"), "ws://")
    ip = host.rpartition(":")[0] if ":" in host else host
    parts = ip.split(".")
    if len(parts) == 4 and all(_is_octet(p) for p in parts):
        return f"{parts[0]}.{parts[1]}"
    return None


def is_subnet_allowed(peers: Collection[str], new_addr: str) -> bool:
    """Whether adding ``new_addr`` keeps its subnet at or below 60% of peers.

    The limit only applies once at least five peers are known.
    """
    total = len(peers)
    if total < MIN_PEERS_FOR_DIVERSITY:
        return True
    subnet = extract_subnet(new_addr)
    if subnet is None:
        return True
    same = sum(1 for addr in peers if extract_subnet(addr) == subnet)
    return (same + 1) / (total + 1) <= MAX_SUBNET_RATIO


def stem_index(tx_id: str, candidate_count: int, now: float | None = None) -> int:
    """Index of the stem peer for ``tx_id``; changes every ten seconds."""
    if candidate_count <= 0:
        raise ValueError("no candidates to choose from")
    entropy = 0
    for i, byte in enumerate(tx_id.encode("utf-8")):
        entropy = (entropy + byte * (i + 31)) & _U64_MASK
    seconds = int(time.time() if now is None else now)
    time_component = max(seconds, 0) // 10
    return (entropy ^ time_component) % candidate_count


def select_stem_peer(
    tx_id: str,
    peers: Iterable[str],
    exclude: str | None = None,
    now: float | None = None,
) -> str | None:
    """Pick the peer to relay a stem-phase transaction to, or None if none remain."""
    candidates = [p for p in peers if p != exclude]
    if not candidates:
        return None
    return candidates[stem_index(tx_id, len(candidates), now)]