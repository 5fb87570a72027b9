"""
app/domain/agency_upload.py

Domain models for parsing an uploaded agency import file.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from app.domain.agency_import import CandidateRow


class ParseErrorType:
    HEADER = "header"
    ROW = "row"
    FILE = "file"


@dataclass(frozen=True)
class ParseError:
    message: str
    type: str
    row: int | None = None


@dataclass(frozen=True)
class ParseResult:
    """
    Rows recovered from one upload plus anything that went wrong.

    success is False when any header, row or file error was recorded;
    rows still holds every row that could be read.
    """

    rows: list[CandidateRow] = field(default_factory=list)
    errors: list[ParseError] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.errors
