"""
Word Refiner - Intra-line edit spans for changed line pairs

Strategies:
    none      no intra-line highlighting
    word      the raw token-level edit script
    word-alt  the token script coalesced into fewer, larger spans
"""

from __future__ import annotations

import logging
from typing import Literal, Optional

from diffplay.models.diff import AlignedDiff, ChangedPair, EditOp, Hunk, OpKind, TokenKind
from diffplay.services.line_matcher import diff_sequences
from diffplay.services.tokenizer import split_tokens

logger = logging.getLogger(__name__)

Strategy = Literal["none", "word", "word-alt"]


def refine_pair(old_text: str, new_text: str, strategy: Strategy = "word-alt") -> Optional[list[EditOp]]:
    """Token-level edit script for one changed pair, or None when disabled"""
    if strategy == "none":
        return None

    old_tokens = [token.text for token in split_tokens(old_text)]
    new_tokens = [token.text for token in split_tokens(new_text)]

    ops = []
    for kind, i, j in diff_sequences(old_tokens, new_tokens):
        text = old_tokens[i] if i is not None else new_tokens[j]
        ops.append(EditOp(kind=kind, text=text, old_index=i, new_index=j))

    if strategy == "word":
        return ops
    return coalesce(ops)


def refine_hunks(aligned: AlignedDiff, strategy: Strategy = "word-alt") -> AlignedDiff:
    """Attach intra-line ops to every changed pair"""
    blocks = []
    for block in aligned.blocks:
        if isinstance(block, Hunk) and block.pairs:
            pairs = [
                ChangedPair(
                    old_line=pair.old_line,
                    new_line=pair.new_line,
                    intra_line_ops=refine_pair(pair.old_line.text, pair.new_line.text, strategy),
                )
                for pair in block.pairs
            ]
            block = block.model_copy(update={"pairs": pairs})
        blocks.append(block)

    logger.debug("Refined %d hunks with strategy %s", len(aligned.hunks), strategy)
    return AlignedDiff(blocks=blocks)


def coalesce(ops: list[EditOp]) -> list[EditOp]:
    """
    Merge a raw token script into larger spans.

    A kept whitespace token between two changes is treated as changed
    on both sides, so "a b" -> "x y" reads as one replacement rather
    than two. Each run of changes then collapses into one replace span
    when its deleted and inserted text are of the same class, and into
    a delete span followed by an insert span otherwise. A span is blank
    when it holds only whitespace, punctuation when its visible tokens
    are all punctuation, and a word span otherwise. Adjacent kept
    tokens merge.
    """
    bridged = _bridge_whitespace(ops)

    result: list[EditOp] = []
    run_old: list[str] = []
    run_new: list[str] = []
    run_old_index: Optional[int] = None
    run_new_index: Optional[int] = None

    def flush_run() -> None:
        nonlocal run_old_index, run_new_index
        if not run_old and not run_new:
            return
        old_text = "".join(run_old)
        new_text = "".join(run_new)
        if old_text and new_text and _span_class(old_text) == _span_class(new_text):
            result.append(
                EditOp(
                    kind=OpKind.REPLACE,
                    text=old_text,
                    new_text=new_text,
                    old_index=run_old_index,
                    new_index=run_new_index,
                )
            )
        else:
            if old_text:
                result.append(EditOp(kind=OpKind.DELETE, text=old_text, old_index=run_old_index))
            if new_text:
                result.append(EditOp(kind=OpKind.INSERT, text=new_text, new_index=run_new_index))
        run_old.clear()
        run_new.clear()
        run_old_index = run_new_index = None

    kept: list[EditOp] = []

    def flush_kept() -> None:
        if kept:
            result.append(
                EditOp(
                    kind=OpKind.KEEP,
                    text="".join(op.text for op in kept),
                    old_index=kept[0].old_index,
                    new_index=kept[0].new_index,
                )
            )
            kept.clear()

    for op in bridged:
        if op.kind == OpKind.KEEP:
            flush_run()
            kept.append(op)
            continue

        flush_kept()
        if op.old_index is not None and run_old_index is None:
            run_old_index = op.old_index
        if op.new_index is not None and run_new_index is None:
            run_new_index = op.new_index
        run_old.append(op.old_text)
        run_new.append(op.after_text)

    flush_run()
    flush_kept()
    return result


def _span_class(text: str) -> TokenKind:
    kinds = {token.kind for token in split_tokens(text)} - {TokenKind.WHITESPACE}
    if not kinds:
        return TokenKind.WHITESPACE
    if kinds == {TokenKind.PUNCTUATION}:
        return TokenKind.PUNCTUATION
    return TokenKind.WORD


def _bridge_whitespace(ops: list[EditOp]) -> list[EditOp]:
    """Turn a kept whitespace token sitting between changes into a delete+insert"""
    bridged: list[EditOp] = []
    for position, op in enumerate(ops):
        if (
            op.kind == OpKind.KEEP
            and 0 < position < len(ops) - 1
            and op.text.isspace()
            and ops[position - 1].kind != OpKind.KEEP
            and ops[position + 1].kind != OpKind.KEEP
        ):
            bridged.append(EditOp(kind=OpKind.DELETE, text=op.text, old_index=op.old_index))
            bridged.append(EditOp(kind=OpKind.INSERT, text=op.text, new_index=op.new_index))
        else:
            bridged.append(op)
    return bridged
