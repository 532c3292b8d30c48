"""
Credentials Service
===================

HTTP surface for BlockCreds:
- Poseidon commitment generation for prover input
- Verification-gated authorization
- Credential minting, history, lender templates and network names

Version: 0.1.0
"""

__version__ = "0.1.0"
