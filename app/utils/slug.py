"""
app/utils/slug.py

URL slug derivation for directory records.
"""

from __future__ import annotations

import re
import unicodedata

_NON_ALNUM_RUN = re.compile(r"[^a-z0-9]+")


def create_slug(value: str | None) -> str:
    """
    Lower-case ASCII slug with non-alphanumeric runs collapsed to hyphens.

    Accented letters fold to their base letter ("Peña" -> "pena"); anything
    else outside [a-z0-9] becomes a separator. Returns "" when nothing usable
    remains.
    """

    if not value:
        return ""
    folded = unicodedata.normalize("NFKD", value)
    ascii_only = folded.encode("ascii", "ignore").decode("ascii")
    # Apostrophes join rather than split: "O'Brien" -> "obrien".
    ascii_only = ascii_only.replace("'", "")
    return _NON_ALNUM_RUN.sub("-", ascii_only.lower()).strip("-")
