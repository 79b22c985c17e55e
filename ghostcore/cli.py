"""Command-line configuration for a ledger node."""

from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass, field
from typing import Sequence

DEFAULT_PORT = 9000
DEFAULT_DATA_DIR = "data"
DEFAULT_LOG = "info"
TRACE = 5

_LEVELS = {
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "debug": logging.DEBUG,
    "trace": TRACE,
}


@dataclass(frozen=True)
class NodeConfig:
    """Settings a node starts with."""

    port: int = DEFAULT_PORT
    peers: list[str] = field(default_factory=list)
    data_dir: str = DEFAULT_DATA_DIR
    genesis: bool = False
    genesis_address: str | None = None
    log: str = DEFAULT_LOG

    def log_level(self) -> int:
        """The logging level named by ``log``; unknown names mean INFO."""
        return _LEVELS.get(self.log.lower(), logging.INFO)

    def snapshot_path(self) -> str:
        """Where this node keeps its state snapshot."""
        return f"{self.data_dir}/node_{self.port}.json"


def _port(text: str) -> int:
    try:
        value = int(text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid port: {text!r}") from exc
    if not 0 <= value <= 0xFFFF:
        raise argparse.ArgumentTypeError(f"port out of range: {value}")
    return value


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ghostledger",
        description="GhostLedger node — feeless anonymous DAG ledger",
    )
    parser.add_argument("--version", action="version", version="%(prog)s 0.1.0")
    parser.add_argument("-p", "--port", type=_port, default=DEFAULT_PORT)
    parser.add_argument("--peers", nargs="*", action="extend", default=[])
    parser.add_argument("--data-dir", default=DEFAULT_DATA_DIR)
    parser.add_argument("--genesis", action="store_true")
    parser.add_argument("--genesis-address", default=None)
    parser.add_argument("--log", default=DEFAULT_LOG)
    return parser


def parse_args(argv: Sequence[str] | None = None) -> NodeConfig:
    """Parse command-line arguments; argparse exits on invalid input."""
    ns = _parser().parse_args(argv)
    return NodeConfig(
        port=ns.port,
        peers=list(ns.peers),
        data_dir=ns.data_dir,
        genesis=ns.genesis,
        genesis_address=ns.genesis_address,
        log=ns.log,
    )