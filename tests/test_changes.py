from subrt.differ.changes import (
    ChangeKind,
    MapChange,
    ValueChange,
    VecChange,
    diff_lists,
    diff_maps,
)


def _compare(a, b):
    return [ValueChange(a, b)] if a != b else []


def _describe(value):
    return f"desc:{value}"


def test_equal_maps_have_no_changes():
    data = {1: "a", 2: "b"}
    assert diff_maps(data, dict(data), _describe, _compare) == []


def test_map_changes():
    left = {1: "a", 2: "b", 3: "c"}
    right = {1: "a", 2: "x", 4: "d"}
    changes = diff_maps(left, right, _describe, _compare)
    assert changes == [
        MapChange(ChangeKind.CHANGED, 2, changes=(ValueChange("b", "x"),)),
        MapChange(ChangeKind.REMOVED, 3),
        MapChange(ChangeKind.ADDED, 4, desc="desc:d"),
    ]


def test_map_diff_is_symmetric_in_kinds():
    left = {"a": 1}
    right = {"b": 2}
    forward = diff_maps(left, right, _describe, _compare)
    backward = diff_maps(right, left, _describe, _compare)
    assert {c.kind for c in forward} == {ChangeKind.ADDED, ChangeKind.REMOVED}
    assert [c.key for c in forward if c.kind is ChangeKind.ADDED] == [
        c.key for c in backward if c.kind is ChangeKind.REMOVED
    ]


def test_equal_lists_have_no_changes():
    assert diff_lists([1, 2, 3], [1, 2, 3], _describe, _compare) == []


def test_list_changes():
    changes = diff_lists([1, 2, 3], [1, 5], _describe, _compare)
    assert changes == [
        VecChange(ChangeKind.CHANGED, 1, changes=(ValueChange(2, 5),)),
        VecChange(ChangeKind.REMOVED, 2, desc="desc:3"),
    ]


def test_list_added():
    changes = diff_lists([], ["x"], _describe, _compare)
    assert changes == [VecChange(ChangeKind.ADDED, 0, desc="desc:x")]