from subrt.differ.items import Call, Constant, PalletError, Storage
from subrt.differ.reduced_pallet import ReducedPallet
from subrt.differ.reduced_runtime import ReducedExtrinsic, ReducedRuntime
from subrt.differ.summary import ReducedPalletSummary, ReducedRuntimeSummary


def _system():
    return ReducedPallet(
        index=0,
        name="System",
        calls={1: Call(1, "remark"), 2: Call(2, "set_code")},
        errors={0: PalletError(0, "Bad")},
        constants={"Version": Constant("Version", b"\x01")},
        storages={"Account": Storage("Account", "Default")},
    )


def test_from_pallet_counts_items():
    summary = ReducedPalletSummary.from_pallet(_system())
    assert (summary.id, summary.name) == (0, "System")
    assert (summary.calls, summary.events, summary.errors) == (2, 0, 1)
    assert (summary.constants, summary.storages) == (1, 1)


def test_pallet_summary_line_layout():
    line = str(ReducedPalletSummary.from_pallet(_system()))
    name_part, rest = line.split(" - ", 1)
    assert name_part == "System".rjust(32)
    assert rest.split() == ["0", "2", "0", "1", "1", "1"]


def test_runtime_summary_sorted_by_id():
    runtime = ReducedRuntime(
        ReducedExtrinsic(4),
        {
            7: ReducedPallet(index=7, name="Balances"),
            0: _system(),
            3: ReducedPallet(index=3, name="Timestamp"),
        },
    )
    lines = str(ReducedRuntimeSummary.from_runtime(runtime)).splitlines()
    assert len(lines) == 5
    assert "NAME" in lines[0] and "STORAGE" in lines[0]
    assert set(lines[1].strip()) == {"-"}
    names = [line.split(" - ")[0].strip() for line in lines[2:]]
    assert names == ["System", "Timestamp", "Balances"]


def test_empty_runtime_summary_has_header_only():
    runtime = ReducedRuntime(ReducedExtrinsic(4))
    summary = ReducedRuntimeSummary.from_runtime(runtime)
    assert summary.pallets == ()
    assert len(str(summary).splitlines()) == 2