"""Diff-related data models"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import Field

from .base import FrozenModel
from .config import PresentationConfig


class FileContents(FrozenModel):
    """One side of a comparison"""

    name: str = ""
    contents: str = ""
    lang: str = "text"  # display hint only

    def display_name(self, fallback: str) -> str:
        return self.name.strip() or fallback


class Line(FrozenModel):
    """A single 0-indexed line of a file"""

    index: int
    text: str


class TokenKind(str, Enum):
    """Token classes used by the word refiner"""

    WORD = "word"
    WHITESPACE = "whitespace"
    PUNCTUATION = "punctuation"


class Token(FrozenModel):
    """Smallest refinable unit of a line"""

    text: str
    kind: TokenKind


class OpKind(str, Enum):
    """Edit operation tags"""

    KEEP = "keep"
    INSERT = "insert"
    DELETE = "delete"
    REPLACE = "replace"  # word-alt spans only


class EditOp(FrozenModel):
    """
    One step of an edit script.

    `text` is the old-side text for keep/delete/replace and the new-side
    text for insert. `new_text` is only set on replace spans.
    """

    kind: OpKind
    text: str
    old_index: int | None = None
    new_index: int | None = None
    new_text: str | None = None

    @property
    def old_text(self) -> str:
        return "" if self.kind == OpKind.INSERT else self.text

    @property
    def after_text(self) -> str:
        if self.kind == OpKind.DELETE:
            return ""
        if self.kind == OpKind.REPLACE:
            return self.new_text or ""
        return self.text


class ChangedPair(FrozenModel):
    """An old/new line association treated as a modification"""

    old_line: Line
    new_line: Line
    intra_line_ops: list[EditOp] | None = None  # None when refinement is off


class ContextBlock(FrozenModel):
    """A maximal run of unchanged lines"""

    type: Literal["context"] = "context"
    lines: list[tuple[Line, Line]]


class Hunk(FrozenModel):
    """A contiguous block of line changes bounded by unchanged context"""

    type: Literal["hunk"] = "hunk"
    index: int
    old_start: int  # 0-indexed
    old_count: int
    new_start: int
    new_count: int
    pairs: list[ChangedPair] = []
    deletions: list[Line] = []
    insertions: list[Line] = []


Block = Annotated[Union[ContextBlock, Hunk], Field(discriminator="type")]


class AlignedDiff(FrozenModel):
    """Context blocks and hunks in file order"""

    blocks: list[Block] = []

    @property
    def hunks(self) -> list[Hunk]:
        return [block for block in self.blocks if isinstance(block, Hunk)]


RowKind = Literal["unchanged", "added", "removed", "changed"]


class SplitRow(FrozenModel):
    """One row of the side-by-side layout"""

    layout: Literal["split"] = "split"
    kind: RowKind
    old_line: Line | None = None
    new_line: Line | None = None
    intra_line_ops: list[EditOp] | None = None
    filler_side: Literal["old", "new"] | None = None
    hunk_index: int | None = None


class UnifiedRow(FrozenModel):
    """One row of the single-column layout"""

    layout: Literal["unified"] = "unified"
    kind: RowKind
    side: Literal["old", "new", "both"]
    line: Line
    old_index: int | None = None
    new_index: int | None = None
    intra_line_ops: list[EditOp] | None = None
    hunk_index: int | None = None


Row = Annotated[Union[SplitRow, UnifiedRow], Field(discriminator="layout")]


class DiffStats(FrozenModel):
    """Line counts for the file header"""

    additions: int = 0
    deletions: int = 0
    changed: int = 0
    hunks: int = 0


class DiffView(FrozenModel):
    """Complete render-ready result for one comparison"""

    old_name: str
    new_name: str
    lang: str
    diff_style: Literal["split", "unified"]
    rows: list[Row]
    stats: DiffStats
    options: PresentationConfig
