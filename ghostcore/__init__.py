"""DAG ledger primitives: ristretto255 commitments, conflict state, quorum merging and peer rules."""

__version__ = "0.1.0"