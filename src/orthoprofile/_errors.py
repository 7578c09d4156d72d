"""
Exceptions and warnings raised by orthoprofile.

Structural misconfiguration (an unknown replacement column, an unknown
ordering keyword) is detected before any string is matched and raised as an
error. Unmatched residue in individual strings is never fatal: it is
reported through ``MissingGraphemeWarning`` and recorded as data.
"""

from __future__ import annotations

__all__ = [
    "MalformedProfileError",
    "InvalidOrderingSpec",
    "MissingGraphemeWarning",
]


class MalformedProfileError(ValueError):
    """Profile cannot serve the requested operation (e.g. unknown column)."""


class InvalidOrderingSpec(ValueError):
    """Unrecognized ordering strategy keyword."""


class MissingGraphemeWarning(UserWarning):
    """A string contains characters not covered by the profile."""
