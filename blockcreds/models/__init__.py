"""
Shared API Models
=================

Response envelopes used by the HTTP services.
"""

from blockcreds.models.common import ErrorResponse, HealthResponse

__all__ = ["ErrorResponse", "HealthResponse"]
