from framedump.core.types import LayoutAlgorithm, Severity, SplitAlign, all_windows_known
from framedump.dsl.ast_nodes import RawFrameLeaf, RawFrameSplit
from framedump.dsl.parser import FrameParser
from framedump.dsl.validator import validate_tree


def leaf(*windows, selection=0):
    return RawFrameLeaf(layout=LayoutAlgorithm.VERTICAL, windows=windows, selection=selection)


def split(first, second, fraction=0.5, selection=0):
    return RawFrameSplit(
        align=SplitAlign.HORIZONTAL,
        fraction=fraction,
        selection=selection,
        first=first,
        second=second,
    )


def test_parsed_tree_is_valid(sample_dump):
    root = FrameParser(sample_dump, all_windows_known).root

    assert validate_tree(root) == []


def test_fraction_out_of_range():
    errors = validate_tree(split(leaf(1), leaf(2), fraction=1.25))

    assert len(errors) == 1
    assert errors[0].path == "root"
    assert "outside [0, 1]" in errors[0].message
    assert errors[0].severity == Severity.ERROR.value


def test_nan_fraction():
    errors = validate_tree(split(leaf(1), leaf(2), fraction=float("nan")))

    assert len(errors) == 1


def test_split_selection():
    errors = validate_tree(split(leaf(1), leaf(2), selection=2))

    assert [e.message for e in errors] == ["Split selection must be 0 or 1, got 2"]


def test_leaf_selection_out_of_range_reports_path():
    errors = validate_tree(split(leaf(1), split(leaf(2), leaf(3, selection=4))))

    assert len(errors) == 1
    assert errors[0].path == "root.second.second"
    assert str(errors[0]) == (
        "[error] root.second.second: Leaf selection 4 is out of range for 1 window(s)"
    )


def test_empty_leaf_with_selection():
    errors = validate_tree(leaf(selection=0))

    assert len(errors) == 1


def test_duplicate_windows_are_warnings():
    errors = validate_tree(split(leaf(1, 1), leaf(1, selection=None)))

    assert [e.severity for e in errors] == [Severity.WARNING.value, Severity.WARNING.value]
    assert errors[0].message == "Window 0x1 appears more than once"
