"""
Layout Projector - Project aligned hunks into split or unified rows
"""

from __future__ import annotations

from typing import Literal, Union

from diffplay.models.diff import (
    AlignedDiff,
    ContextBlock,
    Hunk,
    Line,
    SplitRow,
    UnifiedRow,
)


def to_split_rows(aligned: AlignedDiff) -> list[SplitRow]:
    """
    Two synchronized columns.

    Refined pairs share a row; lines without a counterpart get a filler
    cell on the other side so both columns stay line-aligned.
    """
    rows: list[SplitRow] = []
    for block in aligned.blocks:
        if isinstance(block, ContextBlock):
            rows.extend(
                SplitRow(kind="unchanged", old_line=old, new_line=new)
                for old, new in block.lines
            )
            continue

        deletions, insertions = _unpaired_lines(block)
        for pair in block.pairs:
            if pair.intra_line_ops is None:
                continue
            rows.append(
                SplitRow(
                    kind="changed",
                    old_line=pair.old_line,
                    new_line=pair.new_line,
                    intra_line_ops=pair.intra_line_ops,
                    hunk_index=block.index,
                )
            )
        rows.extend(
            SplitRow(kind="removed", old_line=line, filler_side="new", hunk_index=block.index)
            for line in deletions
        )
        rows.extend(
            SplitRow(kind="added", new_line=line, filler_side="old", hunk_index=block.index)
            for line in insertions
        )
    return rows


def to_unified_rows(aligned: AlignedDiff) -> list[UnifiedRow]:
    """
    One interleaved column.

    Within a hunk every old-side row comes before every new-side row;
    unchanged lines appear once.
    """
    rows: list[UnifiedRow] = []
    for block in aligned.blocks:
        if isinstance(block, ContextBlock):
            rows.extend(
                UnifiedRow(
                    kind="unchanged",
                    side="both",
                    line=new,
                    old_index=old.index,
                    new_index=new.index,
                )
                for old, new in block.lines
            )
            continue

        refined = [pair for pair in block.pairs if pair.intra_line_ops is not None]
        deletions, insertions = _unpaired_lines(block)

        rows.extend(
            UnifiedRow(
                kind="changed",
                side="old",
                line=pair.old_line,
                old_index=pair.old_line.index,
                intra_line_ops=pair.intra_line_ops,
                hunk_index=block.index,
            )
            for pair in refined
        )
        rows.extend(
            UnifiedRow(kind="removed", side="old", line=line, old_index=line.index, hunk_index=block.index)
            for line in deletions
        )
        rows.extend(
            UnifiedRow(
                kind="changed",
                side="new",
                line=pair.new_line,
                new_index=pair.new_line.index,
                intra_line_ops=pair.intra_line_ops,
                hunk_index=block.index,
            )
            for pair in refined
        )
        rows.extend(
            UnifiedRow(kind="added", side="new", line=line, new_index=line.index, hunk_index=block.index)
            for line in insertions
        )
    return rows


def project(
    aligned: AlignedDiff,
    diff_style: Literal["split", "unified"],
) -> Union[list[SplitRow], list[UnifiedRow]]:
    if diff_style == "unified":
        return to_unified_rows(aligned)
    return to_split_rows(aligned)


def _unpaired_lines(hunk: Hunk) -> tuple[list[Line], list[Line]]:
    """
    Lines shown as plain removals and additions.

    Pairs left unrefined dissolve back into a removed and an added line,
    ahead of the hunk's leftover deletions and insertions.
    """
    unrefined = [pair for pair in hunk.pairs if pair.intra_line_ops is None]
    deletions = [pair.old_line for pair in unrefined] + list(hunk.deletions)
    insertions = [pair.new_line for pair in unrefined] + list(hunk.insertions)
    return deletions, insertions
