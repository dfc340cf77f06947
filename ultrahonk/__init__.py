"""Pure-Python verifier for UltraHonk zero-knowledge proofs over BN254."""

__version__ = "0.1.0"