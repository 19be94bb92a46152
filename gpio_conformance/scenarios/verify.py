"""Step verifier: exact token comparison of a reading against its expectation."""

from enum import Enum
from typing import Optional

from gpio_conformance.exceptions import VerificationMismatchError


class Verdict(Enum):
    MATCH = "MATCH"
    MISMATCH = "MISMATCH"


def verify(actual: str, expected: str) -> Verdict:
    """Compare an attribute reading to the expected token.

    No normalization is applied; callers supply the expectation in the
    representation the capability returns (e.g. ``"out"`` or ``"1"``).
    """
    return Verdict.MATCH if actual == expected else Verdict.MISMATCH


def ensure_match(actual: str, expected: str, line: Optional[int] = None) -> str:
    """Return ``actual`` if it matches, else raise VerificationMismatchError."""
    if verify(actual, expected) is Verdict.MISMATCH:
        raise VerificationMismatchError(actual, expected, line=line)
    return actual
