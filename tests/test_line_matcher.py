import random

from diffplay.models.diff import OpKind
from diffplay.services.line_matcher import diff_lines, diff_sequences
from diffplay.services.tokenizer import split_lines


def _old_side(script, a):
    return [a[i] for kind, i, _ in script if kind != OpKind.INSERT]


def _new_side(script, b):
    return [b[j] for kind, _, j in script if kind != OpKind.DELETE]


def _edit_count(script):
    return sum(1 for kind, _, _ in script if kind != OpKind.KEEP)


def _lcs_length(a, b):
    previous = [0] * (len(b) + 1)
    for x in a:
        current = [0]
        for j, y in enumerate(b):
            current.append(previous[j] + 1 if x == y else max(previous[j + 1], current[j]))
        previous = current
    return previous[-1]


def _assert_deletes_before_inserts(script):
    seen_insert = False
    for kind, _, _ in script:
        if kind == OpKind.KEEP:
            seen_insert = False
        elif kind == OpKind.INSERT:
            seen_insert = True
        else:
            assert not seen_insert, "deletion after insertion in the same run"


def test_identical_sequences_are_all_keeps():
    a = list("abcabba")
    script = diff_sequences(a, list(a))
    assert [kind for kind, _, _ in script] == [OpKind.KEEP] * len(a)
    assert [(i, j) for _, i, j in script] == [(i, i) for i in range(len(a))]


def test_empty_inputs():
    assert diff_sequences([], []) == []
    assert diff_sequences([], ["x", "y"]) == [(OpKind.INSERT, None, 0), (OpKind.INSERT, None, 1)]
    assert diff_sequences(["x"], []) == [(OpKind.DELETE, 0, None)]


def test_disjoint_sequences_delete_then_insert():
    script = diff_sequences(["a", "b"], ["c", "d", "e"])
    assert [kind for kind, _, _ in script] == [
        OpKind.DELETE,
        OpKind.DELETE,
        OpKind.INSERT,
        OpKind.INSERT,
        OpKind.INSERT,
    ]


def test_single_substitution_orders_delete_first():
    script = diff_sequences("abc", "axc")
    assert script == [
        (OpKind.KEEP, 0, 0),
        (OpKind.DELETE, 1, None),
        (OpKind.INSERT, None, 1),
        (OpKind.KEEP, 2, 2),
    ]


def test_swapped_pair_is_minimal():
    script = diff_sequences(["A", "B"], ["B", "A"])
    assert _edit_count(script) == 2
    assert _old_side(script, ["A", "B"]) == ["A", "B"]
    assert _new_side(script, ["B", "A"]) == ["B", "A"]


def test_round_trip_and_minimality_against_brute_force():
    rng = random.Random(1234)
    for _ in range(400):
        a = [rng.choice("abcd") for _ in range(rng.randint(0, 9))]
        b = [rng.choice("abcd") for _ in range(rng.randint(0, 9))]
        script = diff_sequences(a, b)

        assert _old_side(script, a) == a
        assert _new_side(script, b) == b
        assert _edit_count(script) == len(a) + len(b) - 2 * _lcs_length(a, b)
        _assert_deletes_before_inserts(script)


def test_keep_indices_are_increasing():
    rng = random.Random(99)
    a = [rng.choice("xyz") for _ in range(40)]
    b = [rng.choice("xyz") for _ in range(40)]
    keeps = [(i, j) for kind, i, j in diff_sequences(a, b) if kind == OpKind.KEEP]
    assert keeps == sorted(keeps)
    assert all(a[i] == b[j] for i, j in keeps)


def test_diff_lines_uses_exact_text():
    old = split_lines("alpha\nbeta \ngamma")
    new = split_lines("alpha\nbeta\ngamma")
    ops = diff_lines(old, new)
    assert [op.kind for op in ops] == [OpKind.KEEP, OpKind.DELETE, OpKind.INSERT, OpKind.KEEP]
    assert ops[1].text == "beta "
    assert ops[1].old_index == 1 and ops[1].new_index is None
    assert ops[2].text == "beta"
    assert ops[2].new_index == 1 and ops[2].old_index is None


def test_diff_lines_large_file_with_few_edits():
    old_text = "\n".join(f"line {i}" for i in range(5000))
    new_lines = [f"line {i}" for i in range(5000)]
    for position in (10, 2500, 4990):
        new_lines[position] = f"changed {position}"
    new_lines.insert(1000, "inserted")
    del new_lines[3000]

    old = split_lines(old_text)
    new = split_lines("\n".join(new_lines))
    ops = diff_lines(old, new)

    assert [op.text for op in ops if op.kind != OpKind.INSERT] == [line.text for line in old]
    assert [op.text for op in ops if op.kind != OpKind.DELETE] == [line.text for line in new]
    assert sum(1 for op in ops if op.kind != OpKind.KEEP) == 8


def _keep_pairs(script):
    return [(i, j) for kind, i, j in script if kind == OpKind.KEEP]


def test_transposed_pair_mirrors_when_swapped():
    forward = diff_sequences(["a", "b"], ["b", "a"])
    backward = diff_sequences(["b", "a"], ["a", "b"])
    assert _keep_pairs(backward) == [(j, i) for i, j in _keep_pairs(forward)]


def test_swapped_arguments_give_the_mirror_script():
    rng = random.Random(4321)
    for _ in range(400):
        a = [rng.choice("abc") for _ in range(rng.randint(0, 8))]
        b = [rng.choice("abc") for _ in range(rng.randint(0, 8))]
        forward = diff_sequences(a, b)
        backward = diff_sequences(b, a)

        assert _keep_pairs(backward) == [(j, i) for i, j in _keep_pairs(forward)]
        assert _edit_count(backward) == _edit_count(forward)
        _assert_deletes_before_inserts(backward)


def test_diff_lines_mirrors_when_swapped():
    rng = random.Random(7)
    samples = [("a\nb", "b\na")]
    for _ in range(200):
        old = "\n".join(rng.choice(["x", "y", "z"]) for _ in range(rng.randint(0, 6)))
        new = "\n".join(rng.choice(["x", "y", "z"]) for _ in range(rng.randint(0, 6)))
        samples.append((old, new))

    for old_text, new_text in samples:
        old, new = split_lines(old_text), split_lines(new_text)
        forward = [(op.old_index, op.new_index) for op in diff_lines(old, new) if op.kind == OpKind.KEEP]
        backward = [(op.old_index, op.new_index) for op in diff_lines(new, old) if op.kind == OpKind.KEEP]
        assert backward == [(j, i) for i, j in forward]
