"""Reduced pallet items (calls, events, errors, constants, storages) and their changes."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any, ClassVar, Union

from .changes import ValueChange, VecChange, diff_lists
from .displayable import DisplayableVec


def _value_changes(left: Any, right: Any, names: Iterable[str], factory: Any) -> list[Any]:
    """One ``factory(name, ValueChange)`` per attribute that differs."""
    return [
        factory(name, ValueChange(getattr(left, name), getattr(right, name)))
        for name in names
        if getattr(left, name) != getattr(right, name)
    ]


def _freeze_docs(instance: Any) -> None:
    object.__setattr__(instance, "docs", tuple(instance.docs))


# --- Signature ----------------------------------------------------------------


@dataclass(frozen=True)
class ArgChange:
    """A change of one attribute of an argument."""

    NAME: ClassVar[str] = "name"
    TY: ClassVar[str] = "ty"

    field: str
    change: ValueChange


@dataclass(frozen=True, order=True)
class Arg:
    """A named and typed argument of a call or event."""

    name: str
    ty: str

    def comparison(self, other: Arg) -> list[ArgChange]:
        """Changes from ``self`` to ``other``; empty when alike."""
        return _value_changes(self, other, (ArgChange.NAME, ArgChange.TY), ArgChange)

    def __str__(self) -> str:
        return f"{self.name}: {self.ty}"


@dataclass(frozen=True)
class SignatureChange:
    """Changes to the arguments of a signature, position by position."""

    args: tuple[VecChange, ...]


@dataclass(frozen=True, order=True)
class Signature:
    """The arguments of a call or event."""

    args: tuple[Arg, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "args", tuple(self.args))

    def comparison(self, other: Signature) -> list[SignatureChange]:
        """A single change holding the argument changes, or an empty list."""
        arg_changes = diff_lists(
            self.args, other.args, lambda arg: arg, lambda a, b: a.comparison(b)
        )
        return [SignatureChange(tuple(arg_changes))] if arg_changes else []

    def __str__(self) -> str:
        return "".join(f"{arg.name}: {arg.ty}, " for arg in self.args) + ") "


# --- Call ---------------------------------------------------------------------


@dataclass(frozen=True)
class CallChange:
    """A change of one attribute of a call."""

    INDEX: ClassVar[str] = "index"
    NAME: ClassVar[str] = "name"
    SIGNATURE: ClassVar[str] = "signature"

    field: str
    change: Any


@dataclass(frozen=True, order=True)
class Call:
    """A reduced call. Its documentation is ignored when comparing."""

    index: int
    name: str
    signature: Signature = field(default_factory=Signature)
    docs: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        _freeze_docs(self)

    def comparison(self, other: Call) -> list[CallChange]:
        """Changes from ``self`` to ``other``; empty when alike."""
        changes = _value_changes(self, other, (CallChange.INDEX, CallChange.NAME), CallChange)
        changes.extend(
            CallChange(CallChange.SIGNATURE, change)
            for change in self.signature.comparison(other.signature)
        )
        return changes

    def __str__(self) -> str:
        return f"{self.index:>2}: {self.name} ( {self.signature} )"


# --- Event --------------------------------------------------------------------


@dataclass(frozen=True)
class EventChange:
    """A change of one attribute of an event."""

    INDEX: ClassVar[str] = "index"
    NAME: ClassVar[str] = "name"
    SIGNATURE: ClassVar[str] = "signature"

    field: str
    change: Any


@dataclass(frozen=True, order=True)
class Event:
    """A reduced event. Its documentation is ignored when comparing."""

    index: int
    name: str
    signature: Signature = field(default_factory=Signature)
    docs: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        _freeze_docs(self)

    def comparison(self, other: Event) -> list[EventChange]:
        """Changes from ``self`` to ``other``; empty when alike."""
        changes = _value_changes(
            self, other, (EventChange.INDEX, EventChange.NAME), EventChange
        )
        changes.extend(
            EventChange(EventChange.SIGNATURE, change)
            for change in self.signature.comparison(other.signature)
        )
        return changes

    def __str__(self) -> str:
        return f"{self.index:>2}: {self.name} ( {self.signature} )"


# --- Error --------------------------------------------------------------------


@dataclass(frozen=True)
class ErrorChange:
    """A change of one attribute of a pallet error."""

    INDEX: ClassVar[str] = "index"
    NAME: ClassVar[str] = "name"

    field: str
    change: ValueChange


@dataclass(frozen=True, order=True)
class PalletError:
    """A reduced pallet error. Its documentation is ignored when comparing."""

    index: int
    name: str
    docs: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        _freeze_docs(self)

    def comparison(self, other: PalletError) -> list[ErrorChange]:
        """Changes from ``self`` to ``other``; empty when alike."""
        return _value_changes(self, other, (ErrorChange.INDEX, ErrorChange.NAME), ErrorChange)

    def __str__(self) -> str:
        return f"{self.index:>2}: {self.name}"


# --- Constant -----------------------------------------------------------------


@dataclass(frozen=True)
class ConstantChange:
    """A change of one attribute of a constant."""

    NAME: ClassVar[str] = "name"
    VALUE: ClassVar[str] = "value"

    field: str
    change: ValueChange


@dataclass(frozen=True, order=True)
class Constant:
    """A reduced constant and its encoded value."""

    name: str
    value: bytes = b""
    docs: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", bytes(self.value))
        _freeze_docs(self)

    def comparison(self, other: Constant) -> list[ConstantChange]:
        """Changes from ``self`` to ``other``; empty when alike."""
        return _value_changes(
            self, other, (ConstantChange.NAME, ConstantChange.VALUE), ConstantChange
        )

    def __str__(self) -> str:
        value = DisplayableVec(list(self.value)).to_short_string()
        return f"{self.name}: {value}"


# --- Storage ------------------------------------------------------------------


@dataclass(frozen=True)
class StorageChange:
    """A change of one attribute of a storage entry."""

    NAME: ClassVar[str] = "name"
    MODIFIER: ClassVar[str] = "modifier"
    DEFAULT_VALUE: ClassVar[str] = "default_value"

    field: str
    change: ValueChange


@dataclass(frozen=True, order=True)
class Storage:
    """A reduced storage entry; ``modifier`` is kept as text."""

    name: str
    modifier: str
    default_value: bytes = b""
    docs: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "default_value", bytes(self.default_value))
        _freeze_docs(self)

    def comparison(self, other: Storage) -> list[StorageChange]:
        """Changes from ``self`` to ``other``; empty when alike."""
        return _value_changes(
            self,
            other,
            (StorageChange.NAME, StorageChange.MODIFIER, StorageChange.DEFAULT_VALUE),
            StorageChange,
        )

    def __str__(self) -> str:
        value = DisplayableVec(list(self.default_value)).to_short_string()
        return f"{self.modifier:<8} {self.name}: {value}"


# --- Pallet item --------------------------------------------------------------

Item = Union[Call, Event, PalletError, Storage, Constant]

_ITEM_LABELS = {
    Call: "Call",
    Event: "Event",
    PalletError: "Error",
    Constant: "Constant",
    Storage: "Storage",
}


@dataclass(frozen=True)
class PalletItem:
    """Any one of the items a pallet is made of."""

    item: Item

    def __post_init__(self) -> None:
        if type(self.item) not in _ITEM_LABELS:
            raise TypeError(f"not a pallet item: {self.item!r}")

    @property
    def label(self) -> str:
        """The kind of item: Call, Event, Error, Constant or Storage."""
        return _ITEM_LABELS[type(self.item)]

    def __str__(self) -> str:
        return f"{self.label:<9}: {self.item}"


# --- Type registry variants ---------------------------------------------------


@dataclass(frozen=True)
class VariantField:
    """A field of an enum variant in the type registry."""

    name: str | None = None
    type_name: str | None = None


@dataclass(frozen=True)
class Variant:
    """An enum variant in the type registry: one call, event or error."""

    index: int
    name: str
    fields: tuple[VariantField, ...] = ()
    docs: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", tuple(self.fields))
        _freeze_docs(self)


def _signature(variant: Variant) -> Signature:
    return Signature(
        tuple(Arg(name=f.name or "", ty=f.type_name or "") for f in variant.fields)
    )


def _by_index(items: Iterable[tuple[int, Any]]) -> dict[int, Any]:
    return dict(sorted(dict(items).items()))


def variant_to_calls(variants: Sequence[Variant]) -> dict[int, Call]:
    """Calls keyed by index, from the variants of a pallet's call enum."""
    return _by_index(
        (v.index, Call(v.index, v.name, _signature(v), v.docs)) for v in variants
    )


def variant_to_events(variants: Sequence[Variant]) -> dict[int, Event]:
    """Events keyed by index, from the variants of a pallet's event enum."""
    return _by_index(
        (v.index, Event(v.index, v.name, _signature(v), v.docs)) for v in variants
    )


def variant_to_errors(variants: Sequence[Variant]) -> dict[int, PalletError]:
    """Errors keyed by index, from the variants of a pallet's error enum."""
    return _by_index((v.index, PalletError(v.index, v.name, v.docs)) for v in variants)