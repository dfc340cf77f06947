import json

import pytest

from ultrahonk.field import Fr
from ultrahonk.types import VerificationError
from ultrahonk.utils import PROOF_SIZE
from ultrahonk.verifier import UltraHonkVerifier, public_inputs_delta


def _vk_json(circuit_size=8, public_inputs_size=0):
    fields = [hex(circuit_size), hex(public_inputs_size)] + ["0x0"] * 18
    for _ in range(27):
        fields += ["0x1", "0x0", "0x2", "0x0"]
    return json.dumps(fields)


def _point(x=1, y=2):
    mask = (1 << 136) - 1
    return b"".join(
        v.to_bytes(32, "big") for v in (x & mask, x >> 136, y & mask, y >> 136)
    )


def _fr_block(count, values=None):
    values = values or {}
    return b"".join(Fr(values.get(i, 0)).to_bytes() for i in range(count))


def _proof_bytes(first_univariate=None, point=None):
    point = point or _point()
    return (
        point * 8
        + _fr_block(28 * 8, first_univariate)
        + _fr_block(40)
        + point * 27
        + _fr_block(28)
        + point * 2
    )


def test_proof_fixture_has_expected_size():
    assert len(_proof_bytes()) == PROOF_SIZE


def test_delta_without_inputs_is_one():
    assert public_inputs_delta([], Fr(3), Fr(4), 1, 8) == Fr.one()


def test_delta_with_zero_beta_is_one():
    inputs = [Fr(5).to_bytes(), Fr(9).to_bytes()]
    assert public_inputs_delta(inputs, Fr(0), Fr(4), 1, 8) == Fr.one()


def test_delta_single_input_ratio():
    delta = public_inputs_delta([Fr(0).to_bytes()], Fr(1), Fr(0), 1, 4)
    assert delta * Fr(-2) == Fr(5)


def test_delta_rejects_bad_input_length():
    with pytest.raises(ValueError):
        public_inputs_delta([b"\x01" * 31], Fr(1), Fr(1), 1, 8)


def test_from_json_loads_sizes():
    verifier = UltraHonkVerifier.from_json(_vk_json(circuit_size=16, public_inputs_size=2))
    assert verifier.vk.circuit_size == 16
    assert verifier.vk.log_circuit_size == 4
    assert verifier.vk.public_inputs_size == 2


def test_verify_rejects_wrong_public_input_count():
    verifier = UltraHonkVerifier.from_json(_vk_json(public_inputs_size=1))
    with pytest.raises(VerificationError, match="expected 1 public inputs, got 0"):
        verifier.verify(_proof_bytes(), [])


def test_verify_rejects_truncated_proof():
    verifier = UltraHonkVerifier.from_json(_vk_json())
    with pytest.raises(ValueError, match="truncated"):
        verifier.verify(_proof_bytes()[:-1], [])


def test_verify_rejects_points_off_curve():
    verifier = UltraHonkVerifier.from_json(_vk_json())
    with pytest.raises(VerificationError, match="not on curve"):
        verifier.verify(_proof_bytes(point=_point(0, 0)), [])


def test_verify_rejects_bad_sumcheck_round():
    verifier = UltraHonkVerifier.from_json(_vk_json())
    with pytest.raises(VerificationError, match="sum-check round 0"):
        verifier.verify(_proof_bytes(first_univariate={0: 1}), [])


def test_verify_reaches_pairing_and_fails():
    verifier = UltraHonkVerifier.from_json(_vk_json())
    with pytest.raises(VerificationError, match="pairing check failed"):
        verifier.verify(_proof_bytes(), [])