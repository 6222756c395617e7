"""
Pair Aligner - Group a line edit script into context blocks and hunks
"""

from __future__ import annotations

from typing import Sequence

from diffplay.models.diff import (
    AlignedDiff,
    Block,
    ChangedPair,
    ContextBlock,
    EditOp,
    Hunk,
    Line,
    OpKind,
)


def align(
    ops: Sequence[EditOp],
    old_lines: Sequence[Line],
    new_lines: Sequence[Line],
) -> AlignedDiff:
    """
    Split the script into context blocks and hunks.

    Inside a hunk the k deletions and m insertions are paired by
    position, first with first, into min(k, m) changed pairs. The
    remaining lines stay pure deletions or insertions.
    """
    blocks: list[Block] = []
    context: list[tuple[Line, Line]] = []
    deleted: list[Line] = []
    inserted: list[Line] = []
    # Where the pending run of changes starts in each file
    old_pos = new_pos = 0
    run_old_start = run_new_start = 0

    hunk_count = 0

    def flush_hunk() -> None:
        nonlocal hunk_count
        if not deleted and not inserted:
            return
        blocks.append(
            _build_hunk(
                hunk_count,
                run_old_start,
                run_new_start,
                deleted,
                inserted,
            )
        )
        hunk_count += 1
        deleted.clear()
        inserted.clear()

    def flush_context() -> None:
        if context:
            blocks.append(ContextBlock(lines=list(context)))
            context.clear()

    for op in ops:
        if op.kind == OpKind.KEEP:
            flush_hunk()
            context.append((old_lines[op.old_index], new_lines[op.new_index]))
            old_pos = op.old_index + 1
            new_pos = op.new_index + 1
            continue

        if not deleted and not inserted:
            flush_context()
            run_old_start = old_pos
            run_new_start = new_pos

        if op.kind == OpKind.DELETE:
            deleted.append(old_lines[op.old_index])
            old_pos = op.old_index + 1
        elif op.kind == OpKind.INSERT:
            inserted.append(new_lines[op.new_index])
            new_pos = op.new_index + 1
        else:
            raise ValueError(f"Unexpected line operation: {op.kind}")

    flush_hunk()
    flush_context()
    return AlignedDiff(blocks=blocks)


def _build_hunk(
    index: int,
    old_start: int,
    new_start: int,
    deleted: list[Line],
    inserted: list[Line],
) -> Hunk:
    paired = min(len(deleted), len(inserted))
    return Hunk(
        index=index,
        old_start=old_start,
        old_count=len(deleted),
        new_start=new_start,
        new_count=len(inserted),
        pairs=[
            ChangedPair(old_line=old, new_line=new)
            for old, new in zip(deleted[:paired], inserted[:paired])
        ],
        deletions=deleted[paired:],
        insertions=inserted[paired:],
    )
