import pytest

from ghostcore.commitments import (
    BalanceProof,
    BlindingFactor,
    Commitment,
    PrivateTxBuilder,
    g_point,
    h_point,
)
from ghostcore.ristretto import ORDER, Point


def test_commitment_verify_correct():
    blinding = BlindingFactor.random()
    c = Commitment.commit(1000, blinding)
    assert c.verify(1000, blinding)


def test_commitment_verify_wrong_amount():
    blinding = BlindingFactor.random()
    c = Commitment.commit(1000, blinding)
    assert not c.verify(999, blinding)


def test_commitment_verify_wrong_blinding():
    b1 = BlindingFactor.random()
    b2 = BlindingFactor.random()
    c = Commitment.commit(1000, b1)
    assert not c.verify(1000, b2)


def test_two_commitments_same_amount_different_blinding():
    c1 = Commitment.commit(500, BlindingFactor.random())
    c2 = Commitment.commit(500, BlindingFactor.random())
    assert c1.point_hex != c2.point_hex
    assert len(c1.point_hex) == len(c2.point_hex) == 64


def test_homomorphic_addition():
    b1 = BlindingFactor.random()
    b2 = BlindingFactor.random()
    c1 = Commitment.commit(300, b1)
    c2 = Commitment.commit(700, b2)
    c_sum = Commitment.commit(1000, b1 + b2)
    assert c1.add(c2).point_hex == c_sum.point_hex


def test_homomorphic_subtraction():
    b1 = BlindingFactor(12345)
    b2 = BlindingFactor(345)
    c1 = Commitment.commit(1000, b1)
    c2 = Commitment.commit(400, b2)
    assert c1.sub(c2) == Commitment.commit(600, BlindingFactor(12000))


def test_zero_commitment_is_identity():
    assert Commitment.zero().point_hex == "00" * 32
    assert Commitment.zero().verify(0, BlindingFactor(0))


def test_add_rejects_invalid_commitment():
    good = Commitment.commit(1, BlindingFactor.random())
    with pytest.raises(ValueError):
        good.add(Commitment("zz"))
    with pytest.raises(ValueError):
        good.sub(Commitment("ff" * 32))


def test_commit_rejects_out_of_range_amount():
    with pytest.raises(ValueError):
        Commitment.commit(2**64, BlindingFactor.random())
    with pytest.raises(ValueError):
        Commitment.commit(-1, BlindingFactor.random())


def test_commit_accepts_max_amount():
    blinding = BlindingFactor.random()
    c = Commitment.commit(2**64 - 1, blinding)
    assert c.verify(2**64 - 1, blinding)


def test_balance_proof_valid():
    b_in = BlindingFactor.random()
    b_out = BlindingFactor.random()
    b_change = BlindingFactor.random()
    c_in = Commitment.commit(1000, b_in)
    c_out = Commitment.commit(700, b_out)
    c_change = Commitment.commit(300, b_change)
    proof = BalanceProof.create([b_in], [b_out, b_change])
    assert proof.verify([c_in], [c_out, c_change])


def test_balance_proof_invalid_wrong_amounts():
    b_in = BlindingFactor.random()
    b_out = BlindingFactor.random()
    c_in = Commitment.commit(1000, b_in)
    c_out = Commitment.commit(999, b_out)
    proof = BalanceProof.create([b_in], [b_out])
    assert not proof.verify([c_in], [c_out])


def test_balance_proof_malformed_excess_fails():
    b_in = BlindingFactor.random()
    c_in = Commitment.commit(10, b_in)
    proof = BalanceProof.create([b_in], [b_in])
    tampered = BalanceProof("not hex", proof.excess_signature_hex)
    assert not tampered.verify([c_in], [c_in])


def test_balance_proof_hex_lengths():
    proof = BalanceProof.create([BlindingFactor.random()], [BlindingFactor.random()])
    assert len(proof.excess_commitment_hex) == 64
    assert len(proof.excess_signature_hex) == 64


def test_private_tx_builder():
    builder = PrivateTxBuilder(1000, 700)
    proof = builder.balance_proof()
    assert proof.verify(
        [builder.input_commitment()],
        [builder.output_commitment(), builder.change_commitment()],
    )


def test_private_tx_builder_full_amount():
    builder = PrivateTxBuilder(500, 500)
    assert builder.change_commitment().verify(0, builder.change_blinding)
    assert builder.balance_proof().verify(
        [builder.input_commitment()],
        [builder.output_commitment(), builder.change_commitment()],
    )


def test_private_tx_builder_insufficient_raises():
    with pytest.raises(ValueError):
        PrivateTxBuilder(100, 200)


def test_blinding_factor_hex_roundtrip():
    b = BlindingFactor.random()
    restored = BlindingFactor.from_hex(b.to_hex())
    assert restored.to_bytes() == b.to_bytes()
    assert restored == b


def test_blinding_factor_rejects_non_canonical():
    with pytest.raises(ValueError):
        BlindingFactor.from_bytes(ORDER.to_bytes(32, "little"))
    with pytest.raises(ValueError):
        BlindingFactor.from_hex("abcd")
    with pytest.raises(ValueError):
        BlindingFactor.from_hex("xy" * 32)


def test_commitment_is_32_bytes_hex():
    c = Commitment.commit(42, BlindingFactor.random())
    assert len(c.point_hex) == 64


def test_generators_are_independent_group_elements():
    assert g_point() == Point.basepoint()
    assert h_point() != g_point()
    assert h_point() == Point.hash_from_bytes(b"GhostLedger_H_v1")