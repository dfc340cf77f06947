# ultrahonk

A pure-Python verifier for UltraHonk proofs on the BN254 curve. It parses a
proof and a verification key, replays the Fiat–Shamir transcript
(Keccak-256), checks each sum-check round and the combined relation, and
finishes with the Shplemini batch opening and a KZG pairing check.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Usage

The verifier takes two inputs:

- a verification key, given as a JSON array of hex-encoded field elements
  (at least 128 of them)
- a proof file, which begins with a 4-byte big-endian count of field
  elements, then holds the public inputs (32 bytes each) and after them the
  440-field proof

```python
from pathlib import Path

from ultrahonk.types import VerificationError
from ultrahonk.utils import encode_public_inputs, load_proof_and_public_inputs
from ultrahonk.verifier import UltraHonkVerifier

target = Path("circuits/simple_circuit/target")

public_inputs, proof_bytes = load_proof_and_public_inputs((target / "proof").read_bytes())
verifier = UltraHonkVerifier.from_json((target / "vk_fields.json").read_text())

try:
    verifier.verify(proof_bytes, encode_public_inputs(public_inputs))
except VerificationError as exc:
    print(f"proof rejected: {exc}")
else:
    print("proof accepted")
```

`verify` returns nothing when the proof is valid. When it is not, it raises
`VerificationError`: for a wrong number of public inputs, a failed sum-check
round, a mismatch in the final relation, a commitment that is not on the
curve, or a failed pairing. Data that cannot be parsed at all (a truncated
proof, a malformed key) raises `ValueError` from the loaders in
`ultrahonk.utils`.

A `VerificationKey` can also be built directly and passed to
`UltraHonkVerifier(vk)`.

## Building blocks

- `ultrahonk.field.Fr`: the BN254 scalar field. It supports `+`, `-`, `*`,
  `/`, negation, `pow` and `inverse`, and converts to and from 32-byte
  big-endian values (`from_bytes`, `to_bytes`) and hex strings (`from_hex`,
  `to_hex`).
- `ultrahonk.hashing.keccak256`: the Keccak-256 hash used by the transcript.
- `ultrahonk.bn254`: G1 point arithmetic (`g1_add`, `g1_neg`, `g1_mul`,
  `g1_is_on_curve`), the G2 curve check, the `Fq2` and `Fq12` extension
  fields, and the optimal ate pairing (`miller_loop`,
  `final_exponentiation`, `pairing`).
- `ultrahonk.types`: `G1Point`, `VerificationKey`, `Proof`,
  `RelationParameters`, `Transcript`, the `Wire` index enum and
  `VerificationError`.
- `ultrahonk.utils`: `load_proof`, `load_vk_from_json`,
  `load_proof_and_public_inputs` and byte/field conversions.
- `ultrahonk.transcript.generate_transcript`: derives every challenge from a
  proof.
- `ultrahonk.relations.accumulate_relation_evaluations`: evaluates the 26
  subrelations and batches them with the alpha challenges.
- `ultrahonk.sumcheck.verify_sumcheck` and
  `ultrahonk.shplemini.verify_shplemini`: the two stages of verification.
- `ultrahonk.verifier.public_inputs_delta`: the permutation correction term
  for the public inputs.

## Debug output

Intermediate values (challenges, round targets, subrelations, the MSM
inputs) are written to the `ultrahonk.trace` logger at DEBUG level through
the standard `logging` module:

```python
import logging

logging.basicConfig(level=logging.DEBUG)
```

## What it does not do

The package is a library only: it has no command-line tool, and it does not
produce proofs or verification keys. It is written for clarity rather than
speed; the pairing is computed in pure Python and a full verification takes
noticeable time.