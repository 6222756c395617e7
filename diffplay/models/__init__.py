"""Models module - Pydantic data models"""

from .config import PresentationConfig, ThemePair
from .diff import (
    AlignedDiff,
    ChangedPair,
    ContextBlock,
    DiffStats,
    DiffView,
    EditOp,
    FileContents,
    Hunk,
    Line,
    OpKind,
    SplitRow,
    Token,
    TokenKind,
    UnifiedRow,
)

__all__ = [
    # Config models
    "PresentationConfig",
    "ThemePair",
    # Input models
    "FileContents",
    "Line",
    "Token",
    "TokenKind",
    # Diff structure models
    "EditOp",
    "OpKind",
    "ChangedPair",
    "ContextBlock",
    "Hunk",
    "AlignedDiff",
    # Output models
    "SplitRow",
    "UnifiedRow",
    "DiffStats",
    "DiffView",
]
