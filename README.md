# ghostcore

Building blocks of a feeless, DAG-based ledger, written in pure Python with no
third-party dependencies.

- `ghostcore.ristretto` – the ristretto255 prime-order group: `Point` with
  `identity()`, `basepoint()`, `decode()`, `encode()`, `from_uniform_bytes()`,
  `hash_from_bytes()`, addition, subtraction and scalar multiplication, plus
  `scalar_reduce()`.
- `ghostcore.commitments` – Pedersen commitments `r*G + v*H` (`g_point()`,
  `h_point()`, `BlindingFactor`, `Commitment`), balance proofs
  (`BalanceProof`) and `PrivateTxBuilder` for a one-input, two-output spend.
- `ghostcore.range_proof` – the `RangeProofSystem` interface, its error
  classes (`RangeProofError`, `NotSupportedError`, `InvalidProofError`,
  `InvalidCommitmentError`), the experimental `PlaceholderRangeProof` backend
  and `RangeProofStatus`.
- `ghostcore.conflict_state` – the conflict state machine (`ConflictStatus`,
  `StatusKind`, `PartitionState`, `InvalidTransitionError`), checkpoint
  anchors (`CheckpointAnchor`), closure outcomes (`ClosureResult`,
  `ClosureKind`) and stake-weighted scoring (`compute_scores()`,
  `pick_winner()`).
- `ghostcore.byzantine_sim` – a deterministic Monte Carlo model of an
  adversary racing to revert a conflict winner (`SimulationParams`,
  `simulate_adversary()`, `SimulationResult`, `xorshift64()`).
- `ghostcore.coordinator` – merging branch states by per-address quorum
  (`quorum_size()`, `quorum_value()`, `Coordinator`, `MergedState`).
- `ghostcore.cli` – node settings (`NodeConfig`) and `parse_args()`.
- `ghostcore.peers` – subnet diversity (`extract_subnet()`,
  `is_subnet_allowed()`) and Dandelion stem-peer choice (`stem_index()`,
  `select_stem_peer()`).

## Installation

```
pip install .
```

## Confidential amounts

```python
from ghostcore.commitments import BlindingFactor, Commitment, PrivateTxBuilder

builder = PrivateTxBuilder(1000, 700)
proof = builder.balance_proof()
assert proof.verify(
    [builder.input_commitment()],
    [builder.output_commitment(), builder.change_commitment()],
)

blinding = BlindingFactor.random()
c = Commitment.commit(42, blinding)
assert c.verify(42, blinding)
assert BlindingFactor.from_hex(blinding.to_hex()) == blinding
```

`PrivateTxBuilder` raises `ValueError` when the output exceeds the input;
amounts must fit in 64 bits. `Commitment.add` and `Commitment.sub` are
homomorphic and raise `ValueError` if a commitment does not decode.

`PlaceholderRangeProof` gives no soundness guarantee:
`PlaceholderRangeProof.is_production_safe()` is `False`, and its `verify`
only checks that the proof is marked experimental.

## Conflict state

```python
from ghostcore.conflict_state import ConflictStatus, PartitionState

ps = PartitionState()
ps.set_closed_local("tx1", "cp1", {}, 0.0)
ps.downgrade_to_reconciling()
ps.set_closed_global("tx1", "cp1")
assert ps.status.is_globally_final()
assert ps.status.winner == "tx1"
```

A move along a forbidden edge raises `InvalidTransitionError`.
`CheckpointAnchor.from_dag` and `compute_scores` accept any object with
`get_transaction(tx_id)` (returning something with `sender` and `weight`, or
`None`) and `descendants_of(tx_id)`.

## Quorum merging

```python
from ghostcore.coordinator import quorum_size, quorum_value

assert quorum_size(5) == 3
assert quorum_value([900, 900, 900, 850, 800], 3) == 900
assert quorum_value([900, 850, 800], 2) == 800
```

`Coordinator.merge` takes objects whose `state` has `balances`, `nonces` and
`applied_txs`.

## Node settings and peers

```python
from ghostcore.cli import parse_args
from ghostcore.peers import extract_subnet, select_stem_peer

config = parse_args(["--port", "9001", "--peers", "ws://10.0.0.1:9000"])
assert config.snapshot_path() == "data/node_9001.json"

assert extract_subnet("ws://192.168.1.5:9000") == "192.168"
peer = select_stem_peer("abc", ["ws://10.0.0.1:9000", "ws://10.0.0.2:9000"], now=0)
```

`parse_args` understands `-p/--port`, `--peers`, `--data-dir`, `--genesis`,
`--genesis-address`, `--log` and `--version`; like any argparse parser it
exits on invalid input.

## What this package does not do

It does not run a node: there is no WebSocket server, no gossip, no peer
discovery loop and no command to start one — `ghostcore.cli` only parses
settings and `ghostcore.peers` only decides which peers to use. It does not
store a DAG or ledger state, and it has no wallet keys, signatures or stealth
addresses. There is no production range proof backend.

## Tests

```
pip install .[test]
pytest
```