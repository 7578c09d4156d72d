"""
Orthography profile submodule.

Re-exports the profile model and its TSV reader/writer.

Basic usage:
    >>> from orthoprofile.profile import Profile, derive_profile
    >>> profile, frequencies = derive_profile(["tsch", "sch"])
    >>> profile.graphemes
    ['c', 'h', 's', 't']
"""

from orthoprofile.profile._model import GraphemeEntry, Profile, derive_profile
from orthoprofile.profile._io import read_profile, rules_path_for, write_profile

__all__ = [
    "GraphemeEntry",
    "Profile",
    "derive_profile",
    "read_profile",
    "write_profile",
    "rules_path_for",
]
