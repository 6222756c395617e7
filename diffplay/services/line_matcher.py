"""
Line Matcher - Shortest edit script between two sequences

Implements Myers' O(ND) difference algorithm with the linear-space
"middle snake" bisection: each step finds the midpoint of an optimal
edit path by running the search from both corners of the edit graph at
once, then recurses on the two halves. Memory stays O(N + M) and time
O((N + M) * D) where D is the number of inserted plus deleted items.
"""

from __future__ import annotations

from typing import Hashable, Optional, Sequence

from diffplay.models.diff import EditOp, Line, OpKind

# (kind, old_index, new_index)
Step = tuple[OpKind, Optional[int], Optional[int]]


def diff_sequences(a: Sequence[Hashable], b: Sequence[Hashable]) -> list[Step]:
    """
    Compute a minimal keep/insert/delete script turning `a` into `b`.

    Within every run of consecutive changes all deletions are emitted
    before all insertions. Items must be hashable and mutually orderable:
    when several minimal scripts exist the choice among them depends only
    on the pair of sequences, never on which one is `a`, so
    `diff_sequences(b, a)` is always the mirror of `diff_sequences(a, b)`.
    """
    if list(b) < list(a):
        return _mirror(_shortest_script(b, a))
    return _shortest_script(a, b)


def _shortest_script(a: Sequence[Hashable], b: Sequence[Hashable]) -> list[Step]:
    script: list[Step] = []

    if a and b and set(a).isdisjoint(b):
        # Nothing can be kept; skip the search entirely.
        script.extend((OpKind.DELETE, i, None) for i in range(len(a)))
        script.extend((OpKind.INSERT, None, j) for j in range(len(b)))
        return script

    _diff_range(a, b, 0, len(a), 0, len(b), script)
    return _deletes_first(script)


def diff_lines(old_lines: Sequence[Line], new_lines: Sequence[Line]) -> list[EditOp]:
    """Line-level edit script, comparing lines by exact text"""
    # Ids follow text order so comparing id lists matches comparing texts
    texts = {line.text for line in old_lines} | {line.text for line in new_lines}
    ids = {text: n for n, text in enumerate(sorted(texts))}
    old_ids = [ids[line.text] for line in old_lines]
    new_ids = [ids[line.text] for line in new_lines]

    ops = []
    for kind, i, j in diff_sequences(old_ids, new_ids):
        text = old_lines[i].text if i is not None else new_lines[j].text
        ops.append(EditOp(kind=kind, text=text, old_index=i, new_index=j))
    return ops


def _diff_range(
    a: Sequence[Hashable],
    b: Sequence[Hashable],
    a_lo: int,
    a_hi: int,
    b_lo: int,
    b_hi: int,
    script: list[Step],
) -> None:
    # Common prefix
    while a_lo < a_hi and b_lo < b_hi and a[a_lo] == b[b_lo]:
        script.append((OpKind.KEEP, a_lo, b_lo))
        a_lo += 1
        b_lo += 1

    # Common suffix, emitted after the middle part
    suffix: list[Step] = []
    while a_lo < a_hi and b_lo < b_hi and a[a_hi - 1] == b[b_hi - 1]:
        a_hi -= 1
        b_hi -= 1
        suffix.append((OpKind.KEEP, a_hi, b_hi))

    if a_lo == a_hi:
        script.extend((OpKind.INSERT, None, j) for j in range(b_lo, b_hi))
    elif b_lo == b_hi:
        script.extend((OpKind.DELETE, i, None) for i in range(a_lo, a_hi))
    else:
        split = _middle_snake(a, b, a_lo, a_hi, b_lo, b_hi)
        if split is None:
            script.extend((OpKind.DELETE, i, None) for i in range(a_lo, a_hi))
            script.extend((OpKind.INSERT, None, j) for j in range(b_lo, b_hi))
        else:
            x, y = split
            _diff_range(a, b, a_lo, x, b_lo, y, script)
            _diff_range(a, b, x, a_hi, y, b_hi, script)

    script.extend(reversed(suffix))


def _middle_snake(
    a: Sequence[Hashable],
    b: Sequence[Hashable],
    a_lo: int,
    a_hi: int,
    b_lo: int,
    b_hi: int,
) -> Optional[tuple[int, int]]:
    """
    Find a point on an optimal edit path, splitting the box in two.

    Forward furthest-reaching x values per diagonal k = x - y live in
    `v_fwd`; the reverse search stores x distances from the bottom-right
    corner in `v_rev`. Returns None when the two sequences share nothing.
    """
    n = a_hi - a_lo
    m = b_hi - b_lo
    max_d = (n + m + 1) // 2
    offset = max_d
    size = 2 * max_d + 2
    v_fwd = [-1] * size
    v_rev = [-1] * size
    v_fwd[offset + 1] = 0
    v_rev[offset + 1] = 0
    delta = n - m
    # With an odd delta the paths meet while extending forward
    front = delta % 2 != 0

    # Diagonals that ran off the grid are skipped in later rounds
    k1_start = k1_end = k2_start = k2_end = 0

    for d in range(max_d):
        for k1 in range(-d + k1_start, d + 1 - k1_end, 2):
            k1_off = offset + k1
            # Ties move right (deletion) rather than down (insertion)
            if k1 == -d or (k1 != d and v_fwd[k1_off - 1] < v_fwd[k1_off + 1]):
                x1 = v_fwd[k1_off + 1]
            else:
                x1 = v_fwd[k1_off - 1] + 1
            y1 = x1 - k1
            while x1 < n and y1 < m and a[a_lo + x1] == b[b_lo + y1]:
                x1 += 1
                y1 += 1
            v_fwd[k1_off] = x1
            if x1 > n:
                k1_end += 2
            elif y1 > m:
                k1_start += 2
            elif front:
                k2_off = offset + delta - k1
                if 0 <= k2_off < size and v_rev[k2_off] != -1:
                    if x1 >= n - v_rev[k2_off]:
                        return a_lo + x1, b_lo + y1

        for k2 in range(-d + k2_start, d + 1 - k2_end, 2):
            k2_off = offset + k2
            if k2 == -d or (k2 != d and v_rev[k2_off - 1] < v_rev[k2_off + 1]):
                x2 = v_rev[k2_off + 1]
            else:
                x2 = v_rev[k2_off - 1] + 1
            y2 = x2 - k2
            while x2 < n and y2 < m and a[a_hi - 1 - x2] == b[b_hi - 1 - y2]:
                x2 += 1
                y2 += 1
            v_rev[k2_off] = x2
            if x2 > n:
                k2_end += 2
            elif y2 > m:
                k2_start += 2
            elif not front:
                k1_off = offset + delta - k2
                if 0 <= k1_off < size and v_fwd[k1_off] != -1:
                    x1 = v_fwd[k1_off]
                    y1 = x1 - (k1_off - offset)
                    if x1 >= n - x2:
                        return a_lo + x1, b_lo + y1

    return None


def _mirror(script: list[Step]) -> list[Step]:
    """Swap the roles of the two sequences in a script"""
    swapped = {OpKind.DELETE: OpKind.INSERT, OpKind.INSERT: OpKind.DELETE, OpKind.KEEP: OpKind.KEEP}
    return _deletes_first([(swapped[kind], j, i) for kind, i, j in script])


def _deletes_first(script: list[Step]) -> list[Step]:
    """Reorder each run of changes so deletions precede insertions"""
    result: list[Step] = []
    inserts: list[Step] = []
    for step in script:
        kind = step[0]
        if kind == OpKind.INSERT:
            inserts.append(step)
        elif kind == OpKind.DELETE:
            result.append(step)
        else:
            result.extend(inserts)
            inserts.clear()
            result.append(step)
    result.extend(inserts)
    return result
