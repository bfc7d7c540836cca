"""Per-pallet counts of calls, events, errors, constants and storages."""

from __future__ import annotations

from dataclasses import dataclass

from .reduced_pallet import ReducedPallet
from .reduced_runtime import ReducedRuntime

_SEPARATOR = (
    "            ---------------------------------------------------------------------------"
)


@dataclass(frozen=True, order=True)
class ReducedPalletSummary:
    """How many items of each kind a pallet has."""

    id: int
    name: str
    calls: int
    events: int
    errors: int
    constants: int
    storages: int

    @classmethod
    def from_pallet(cls, pallet: ReducedPallet) -> ReducedPalletSummary:
        """Count the items of ``pallet``."""
        return cls(
            id=pallet.index,
            name=pallet.name,
            calls=len(pallet.calls),
            events=len(pallet.events),
            errors=len(pallet.errors),
            constants=len(pallet.constants),
            storages=len(pallet.storages),
        )

    def __str__(self) -> str:
        return (
            f"{self.name:>32} - {self.id:<4}  {self.calls:>8} {self.events:>8} "
            f"{self.errors:>8} {self.constants:>8} {self.storages:>8}"
        )


@dataclass(frozen=True)
class ReducedRuntimeSummary:
    """Summaries of every pallet of a runtime."""

    pallets: tuple[ReducedPalletSummary, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "pallets", tuple(self.pallets))

    @classmethod
    def from_runtime(cls, runtime: ReducedRuntime) -> ReducedRuntimeSummary:
        """Summarise each pallet of ``runtime``."""
        return cls(tuple(ReducedPalletSummary.from_pallet(p) for p in runtime.pallets.values()))

    def __str__(self) -> str:
        header = (
            f"{'NAME':>32}   {'ID':<4}  {'CALLS':>8} {'EVENTS':>8} {'ERRORS':>8} "
            f"{'CONSTANTS':>8} {'STORAGE':>8}"
        )
        lines = [header, _SEPARATOR, *(str(p) for p in sorted(self.pallets))]
        return "".join(line + "\n" for line in lines)