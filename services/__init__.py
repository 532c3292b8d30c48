"""
BlockCreds Services
===================

HTTP services of the BlockCreds platform.

Services:
- credentials: score commitments, verification-gated authorization and
  credential minting
"""

__all__ = [
    "credentials",
]
