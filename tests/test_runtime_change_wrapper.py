from subrt.differ.changes import ChangeKind, ComparisonSide
from subrt.differ.items import Arg, Call, Signature
from subrt.differ.reduced_pallet import ReducedPallet
from subrt.differ.reduced_runtime import (
    ReducedExtrinsic,
    ReducedRuntime,
    ReducedSignedExtension,
)
from subrt.differ.runtime_change_wrapper import (
    ChangedWrapper,
    ReducedRuntimeChangeWrapper,
    get_changes_count,
)


def _remark(ty="Vec<u8>"):
    return Call(1, "remark", Signature((Arg("remark", ty),)))


def _runtimes():
    a = ReducedRuntime(
        ReducedExtrinsic(4),
        {
            0: ReducedPallet(index=0, name="System", calls={1: _remark()}),
            5: ReducedPallet(index=5, name="Gone"),
        },
    )
    b = ReducedRuntime(
        ReducedExtrinsic(4),
        {
            0: ReducedPallet(index=0, name="System", calls={1: _remark("Bytes")}),
            9: ReducedPallet(index=9, name="Fresh"),
        },
    )
    return a, b


def _wrapper(a, b):
    return ReducedRuntimeChangeWrapper(a.comparison(b), a, b)


def test_display_lists_removed_added_and_changed_pallets():
    a, b = _runtimes()
    text = str(_wrapper(a, b))
    assert "[-] pallet 5: Gone\n" in text
    assert "[+] id:  9 - new pallet: Fresh\n" in text
    assert "[≠] pallet 0: System -> 1 change(s)\n" in text
    assert "  - calls changes:\n" in text


def test_get_pallet_by_side():
    a, b = _runtimes()
    wrapper = _wrapper(a, b)
    assert wrapper.get_pallet(5, ComparisonSide.LEFT) is a.pallets[5]
    assert wrapper.get_pallet(5, ComparisonSide.RIGHT) is None
    assert wrapper.get_pallet(9, ComparisonSide.RIGHT) is b.pallets[9]


def test_changes_count_sums_collection_items():
    a = ReducedPallet(index=0, name="System", calls={1: _remark(), 2: Call(2, "x")})
    b = ReducedPallet(index=3, name="System")
    changes = a.comparison(b)
    assert get_changes_count(changes) == 3
    assert get_changes_count([]) == 0


def test_changed_wrapper_lookups():
    a, b = _runtimes()
    changed = ChangedWrapper(_wrapper(a, b))
    pallet_changes = changed.get_pallets_changes()
    assert sorted(mc.key for mc in pallet_changes) == [0, 5, 9]
    assert changed.get_pallet_changes_by_id(5).kind is ChangeKind.REMOVED
    assert changed.get_pallet_changes_by_id(9).kind is ChangeKind.ADDED
    assert changed.get_pallet_changes_by_id(1) is None
    assert str(changed) == str(changed.wrapper)


def test_extrinsic_change_is_reported_and_not_a_pallet_change():
    a = ReducedRuntime(ReducedExtrinsic(4, (ReducedSignedExtension("CheckNonce"),)))
    b = ReducedRuntime(ReducedExtrinsic(5))
    changed = ChangedWrapper(_wrapper(a, b))
    assert str(changed) == "EX Change\n"
    assert changed.get_pallets_changes() == []


def test_identical_runtimes_render_empty():
    a, _ = _runtimes()
    assert str(_wrapper(a, a)) == ""