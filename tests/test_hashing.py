from ultrahonk.hashing import keccak256


def test_empty_input_digest():
    assert keccak256(b"").hex() == (
        "c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470"
    )


def test_digest_length_and_determinism():
    digest = keccak256(b"ultrahonk")
    assert len(digest) == 32
    assert keccak256(bytearray(b"ultrahonk")) == digest


def test_different_inputs_differ():
    assert keccak256(b"\x00") != keccak256(b"\x01")