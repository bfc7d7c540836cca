"""Decide whether the changes between two runtimes stay compatible or need a version bump."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass

from . import analysis
from .changes import ChangeKind, MapChange
from .reduced_runtime import ReducedRuntimeChange
from .runtime_change_wrapper import ChangedWrapper

log = logging.getLogger(__name__)


def _pallet_compatible(map_change: MapChange) -> bool:
    if map_change.kind is ChangeKind.ADDED:
        return True
    if map_change.kind is ChangeKind.REMOVED:
        return False
    return all(analysis.compatible(change) for change in map_change.changes)


def _pallet_bump(map_change: MapChange) -> bool:
    if map_change.kind is not ChangeKind.CHANGED:
        return False
    return any(analysis.require_tx_version_bump(change) for change in map_change.changes)


@dataclass(frozen=True)
class DiffAnalyzer:
    """Analyses the changes between a reference runtime and a new one.

    It tells which pallets changed, whether the new runtime keeps the API
    compatible and whether its ``transaction_version`` must be bumped.
    """

    changes: ChangedWrapper

    def get_pallet_changes(self, pallet_id: int) -> MapChange | None:
        """The change concerning the pallet ``pallet_id``, if any."""
        return self.changes.get_pallet_changes_by_id(pallet_id)

    def compatible(self) -> bool:
        """Whether the new runtime keeps the API compatible for users."""
        runtime_changes = self.changes.changes
        if not runtime_changes:
            return True
        for change in runtime_changes:
            if change.field == ReducedRuntimeChange.PALLETS:
                if not all(_pallet_compatible(mc) for mc in change.changes):
                    return False
            # Extrinsic changes are not analysed yet and count as compatible.
        return True

    def require_tx_version_bump(self) -> bool:
        """Whether the new runtime requires a ``transaction_version`` bump."""
        runtime_changes = self.changes.changes
        if not runtime_changes:
            return False
        result = False
        for change in runtime_changes:
            if change.field == ReducedRuntimeChange.PALLETS:
                if any(_pallet_bump(mc) for mc in change.changes):
                    result = True
            else:
                print(
                    "Extrinsic diff is not implemented yet but subwasm spotted some changes.",
                    file=sys.stderr,
                )
                print("This is normal if you compare different chains.", file=sys.stderr)
        log.debug("TxBump | Analyzer: %s", result)
        return result