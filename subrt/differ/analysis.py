"""Whether changes between two runtimes stay compatible or need a ``transaction_version`` bump.

A change is *compatible* when users can keep calling the new runtime as they
called the old one. A change *requires a transaction_version bump* when a user
could end up submitting the wrong call, for instance after a call index moved.
A change can be incompatible without requiring a bump: a changed call
signature is one such case.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from functools import singledispatch
from typing import Any

from .changes import ChangeKind, MapChange, VecChange
from .items import (
    ArgChange,
    CallChange,
    ConstantChange,
    ErrorChange,
    EventChange,
    SignatureChange,
    StorageChange,
)
from .reduced_pallet import ReducedPalletChange

log = logging.getLogger(__name__)


def _traced(label: str, kind: str, result: bool) -> bool:
    log.debug("%s | %s: %s", label, kind, result)
    return result


# --- Compatibility ------------------------------------------------------------


@singledispatch
def compatible(change: Any) -> bool:
    """Whether ``change`` keeps the runtime API compatible for users."""
    raise TypeError(f"cannot analyse {type(change).__name__}")


def _call_map_change_compatible(map_change: MapChange) -> bool:
    if map_change.kind is ChangeKind.ADDED:
        return True
    if map_change.kind is ChangeKind.REMOVED:
        return False
    return all(compatible(item) for item in map_change.changes)


@compatible.register
def _(change: ReducedPalletChange) -> bool:
    if change.field in (ReducedPalletChange.INDEX, ReducedPalletChange.NAME):
        result = False
    elif change.field == ReducedPalletChange.CALLS:
        result = all(_call_map_change_compatible(mc) for mc in change.change)
    else:
        result = True
    return _traced("Compat.", "Pallet", result)


@compatible.register
def _(change: CallChange) -> bool:
    result = change.field == CallChange.SIGNATURE and compatible(change.change)
    return _traced("Compat.", "Call", result)


@compatible.register
def _(change: ConstantChange) -> bool:
    return _traced("Compat.", "Constant", change.field == ConstantChange.VALUE)


@compatible.register
def _(change: EventChange) -> bool:
    result = change.field == EventChange.SIGNATURE and compatible(change.change)
    return _traced("Compat.", "Event", result)


@compatible.register
def _(change: ErrorChange) -> bool:
    return _traced("Compat.", "Error", False)


@compatible.register
def _(change: StorageChange) -> bool:
    return _traced("Compat.", "Storage", change.field == StorageChange.DEFAULT_VALUE)


@compatible.register
def _(change: SignatureChange) -> bool:
    result = all(compatible(arg_changes) for arg_changes in change.args)
    return _traced("Compat.", "Signature", result)


@compatible.register
def _(change: VecChange) -> bool:
    result = change.kind is ChangeKind.CHANGED and _args_compatible(change.changes)
    return _traced("Compat.", "VecChange", result)


def _args_compatible(changes: Iterable[ArgChange]) -> bool:
    result = all(compatible(item) for item in changes)
    return _traced("Compat.", "Vec<ArgChange>", result)


@compatible.register(list)
@compatible.register(tuple)
def _(changes: Iterable[ArgChange]) -> bool:
    return _args_compatible(changes)


@compatible.register
def _(change: ArgChange) -> bool:
    return _traced("Compat.", "ArgChange", False)


# --- transaction_version bump -------------------------------------------------


@singledispatch
def require_tx_version_bump(change: Any) -> bool:
    """Whether ``change`` requires bumping the runtime's ``transaction_version``."""
    raise TypeError(f"cannot analyse {type(change).__name__}")


def _call_map_change_bump(map_change: MapChange) -> bool:
    if map_change.kind is ChangeKind.ADDED:
        return False
    if map_change.kind is ChangeKind.REMOVED:
        return True
    return any(require_tx_version_bump(item) for item in map_change.changes)


@require_tx_version_bump.register
def _(change: ReducedPalletChange) -> bool:
    if change.field == ReducedPalletChange.INDEX:
        result = True
    elif change.field == ReducedPalletChange.CALLS:
        result = any(_call_map_change_bump(mc) for mc in change.change)
    else:
        result = False
    return _traced("TxBump", "Pallet", result)


@require_tx_version_bump.register
def _(change: CallChange) -> bool:
    if change.field == CallChange.INDEX:
        result = True
    elif change.field == CallChange.SIGNATURE:
        result = require_tx_version_bump(change.change)
    else:
        result = False
    return _traced("TxBump", "CallChange", result)


@require_tx_version_bump.register(ConstantChange)
@require_tx_version_bump.register(EventChange)
@require_tx_version_bump.register(ErrorChange)
@require_tx_version_bump.register(StorageChange)
def _(change: Any) -> bool:
    return _traced("TxBump", type(change).__name__, False)


@require_tx_version_bump.register
def _(change: SignatureChange) -> bool:
    result = any(require_tx_version_bump(arg_changes) for arg_changes in change.args)
    return _traced("TxBump", "SignatureChange", result)


@require_tx_version_bump.register
def _(change: VecChange) -> bool:
    # Adding or removing an argument breaks compatibility, not the transaction version.
    result = change.kind is ChangeKind.CHANGED and _args_bump(change.changes)
    return _traced("TxBump", "VecChange<...>", result)


def _args_bump(changes: Iterable[ArgChange]) -> bool:
    result = any(require_tx_version_bump(item) for item in changes)
    return _traced("TxBump", "Vec<ArgChange>", result)


@require_tx_version_bump.register(list)
@require_tx_version_bump.register(tuple)
def _(changes: Iterable[ArgChange]) -> bool:
    return _args_bump(changes)


@require_tx_version_bump.register
def _(change: ArgChange) -> bool:
    # Renaming an argument is fine; a new type breaks compatibility only.
    return _traced("TxBump", "ArgChange", False)