"""Services module - Diff engine and settings"""

from .config_manager import ConfigManager
from .diff_generator import DiffGenerator, compute_stats
from .layout_projector import project, to_split_rows, to_unified_rows
from .line_matcher import diff_lines, diff_sequences
from .pair_aligner import align
from .tokenizer import classify_token, split_lines, split_tokens
from .word_refiner import coalesce, refine_hunks, refine_pair

__all__ = [
    "ConfigManager",
    "DiffGenerator",
    "compute_stats",
    "split_lines",
    "split_tokens",
    "classify_token",
    "diff_lines",
    "diff_sequences",
    "align",
    "refine_pair",
    "refine_hunks",
    "coalesce",
    "project",
    "to_split_rows",
    "to_unified_rows",
]
