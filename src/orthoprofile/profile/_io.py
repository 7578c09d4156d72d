"""
Reading and writing orthography profiles as TSV files.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

from orthoprofile._tsv import read_tsv, write_tsv
from orthoprofile.profile._model import Profile

__all__ = ["read_profile", "write_profile", "rules_path_for"]

RULES_SUFFIX = ".rules"


def read_profile(path: str | Path) -> Profile:
    """
    Load a profile from a TSV file with a header row.

    Raises:
        FileNotFoundError: If the file does not exist
        MalformedProfileError: If the file has no grapheme column
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Profile file not found: {path}")
    return Profile.from_records(read_tsv(path))


def write_profile(
    profile: Profile,
    path: str | Path,
    frequencies: Optional[Sequence[int]] = None,
    info: bool = False,
    editing: bool = False,
) -> None:
    """
    Save a profile as a TSV file.

    Args:
        profile: Profile to write (in its current order)
        path: Destination file
        frequencies: Optional per-entry counts, written as "Frequency"
        info: Add Codepoint and UnicodeName columns
        editing: Always include Left, Right and Class columns
    """
    records = profile.to_records(frequencies=frequencies, info=info, editing=editing)
    if records:
        columns = list(records[0])
    else:
        columns = ["Grapheme", *profile.columns]
    write_tsv(path, records, columns)


def rules_path_for(profile_path: str | Path) -> Path:
    """
    Conventional location of the rule file belonging to a profile.

    Example:
        >>> rules_path_for("profiles/dutch.prf").as_posix()
        'profiles/dutch.rules'
    """
    return Path(profile_path).with_suffix(RULES_SUFFIX)
