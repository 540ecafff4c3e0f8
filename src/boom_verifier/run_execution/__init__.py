"""Run execution domain exports."""

from .run_contracts import VerificationRequest
from .verification_run_use_case import (
    PreconditionError,
    VerificationRunError,
    execute_verification_run,
)

__all__ = [
    "VerificationRequest",
    "PreconditionError",
    "VerificationRunError",
    "execute_verification_run",
]
