"""
Diff Generator Service - Build render-ready diffs for the playground
"""

from __future__ import annotations

import logging
import re
from typing import Any, Mapping

from diffplay.models.config import PresentationConfig
from diffplay.models.diff import AlignedDiff, DiffStats, DiffView, FileContents, Line, OpKind
from diffplay.services.layout_projector import project
from diffplay.services.line_matcher import diff_lines, diff_sequences
from diffplay.services.pair_aligner import align
from diffplay.services.tokenizer import split_lines
from diffplay.services.word_refiner import refine_hunks

logger = logging.getLogger(__name__)

OLD_FALLBACK_NAME = "before"
NEW_FALLBACK_NAME = "after"

_LINE_RE = re.compile(r"[^\n]*\n|[^\n]+\Z")


class DiffGenerator:
    """Compute diffs between two file snapshots"""

    def generate_diff(
        self,
        old_file: FileContents,
        new_file: FileContents,
        options: Mapping[str, Any] | PresentationConfig | None = None,
        swap: bool = False,
    ) -> DiffView:
        """
        Run one full comparison and lay it out per the options.

        The result depends only on the arguments; calling again with
        equal inputs gives an equal DiffView.
        """
        config = PresentationConfig.from_options(options)
        if swap:
            old_file, new_file = new_file, old_file

        aligned = self.align_files(old_file, new_file)
        aligned = refine_hunks(aligned, config.line_refinement)
        rows = project(aligned, config.diff_style)
        stats = compute_stats(aligned)

        logger.debug(
            "Diffed %s -> %s: %d hunks, +%d -%d, %d %s rows",
            old_file.display_name(OLD_FALLBACK_NAME),
            new_file.display_name(NEW_FALLBACK_NAME),
            stats.hunks,
            stats.additions,
            stats.deletions,
            len(rows),
            config.diff_style,
        )

        return DiffView(
            old_name=old_file.display_name(OLD_FALLBACK_NAME),
            new_name=new_file.display_name(NEW_FALLBACK_NAME),
            lang=new_file.lang or old_file.lang,
            diff_style=config.diff_style,
            rows=rows,
            stats=stats,
            options=config,
        )

    def align_files(self, old_file: FileContents, new_file: FileContents) -> AlignedDiff:
        """Line diff and positional pairing, without intra-line refinement"""
        old_lines = _matchable_lines(old_file.contents)
        new_lines = _matchable_lines(new_file.contents)
        return align(diff_lines(old_lines, new_lines), old_lines, new_lines)

    def generate_patch(
        self,
        old_file: FileContents,
        new_file: FileContents,
        context_lines: int = 3,
    ) -> str:
        """
        Render the comparison as unified patch text.

        Returns an empty string when both files are identical.
        """
        old_lines = _LINE_RE.findall(old_file.contents)
        new_lines = _LINE_RE.findall(new_file.contents)
        script = diff_sequences(old_lines, new_lines)
        if all(kind == OpKind.KEEP for kind, _, _ in script):
            return ""

        context_lines = max(context_lines, 0)
        output = [
            f"--- a/{old_file.display_name(OLD_FALLBACK_NAME)}",
            f"+++ b/{new_file.display_name(NEW_FALLBACK_NAME)}",
        ]

        # Line positions reached before each step of the script
        old_before = []
        new_before = []
        old_pos = new_pos = 0
        for kind, _, _ in script:
            old_before.append(old_pos)
            new_before.append(new_pos)
            if kind != OpKind.INSERT:
                old_pos += 1
            if kind != OpKind.DELETE:
                new_pos += 1

        for start, end in _patch_groups(script, context_lines):
            old_count = sum(1 for kind, _, _ in script[start:end] if kind != OpKind.INSERT)
            new_count = sum(1 for kind, _, _ in script[start:end] if kind != OpKind.DELETE)
            output.append(
                f"@@ -{_range(old_before[start], old_count)}"
                f" +{_range(new_before[start], new_count)} @@"
            )
            for kind, i, j in script[start:end]:
                if kind == OpKind.KEEP:
                    prefix, text = " ", old_lines[i]
                elif kind == OpKind.DELETE:
                    prefix, text = "-", old_lines[i]
                else:
                    prefix, text = "+", new_lines[j]
                output.append(prefix + text.rstrip("\n"))
                if not text.endswith("\n"):
                    output.append("\\ No newline at end of file")

        return "\n".join(output) + "\n"


def compute_stats(aligned: AlignedDiff) -> DiffStats:
    hunks = aligned.hunks
    return DiffStats(
        additions=sum(h.new_count for h in hunks),
        deletions=sum(h.old_count for h in hunks),
        changed=sum(len(h.pairs) for h in hunks),
        hunks=len(hunks),
    )


def _matchable_lines(contents: str) -> list[Line]:
    # An empty file has no lines to match, so its counterpart shows up
    # as pure insertions or deletions.
    if not contents:
        return []
    return split_lines(contents)


def _patch_groups(script: list, context_lines: int) -> list[tuple[int, int]]:
    """Script index ranges for each patch hunk, merging nearby changes"""
    changes = [pos for pos, (kind, _, _) in enumerate(script) if kind != OpKind.KEEP]
    groups: list[tuple[int, int]] = []
    for pos in changes:
        start = max(pos - context_lines, 0)
        end = min(pos + 1 + context_lines, len(script))
        if groups and start <= groups[-1][1]:
            groups[-1] = (groups[-1][0], end)
        else:
            groups.append((start, end))
    return groups


def _range(before: int, count: int) -> str:
    # Unified diff ranges are 1-indexed; an empty range names the line before it
    start = before + 1 if count else before
    if count == 1:
        return str(start)
    return f"{start},{count}"
