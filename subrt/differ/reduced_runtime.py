"""A reduced runtime: its extrinsic format and pallets, and the changes between two."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, ClassVar

from .changes import ValueChange, diff_lists, diff_maps
from .reduced_pallet import ReducedPallet


def _ascii_lower(text: str) -> str:
    return "".join(ch.lower() if ch.isascii() else ch for ch in text)


@dataclass(frozen=True)
class ReducedSignedExtension:
    """A signed extension, identified by name."""

    identifier: str

    def comparison(self, other: ReducedSignedExtension) -> list[ValueChange]:
        """The identifier change, if any."""
        if self.identifier == other.identifier:
            return []
        return [ValueChange(self.identifier, other.identifier)]


@dataclass(frozen=True)
class ReducedExtrinsicChange:
    """A change to one field of the extrinsic format.

    ``change`` is a ``ValueChange`` for the version and a tuple of
    ``VecChange`` for the signed extensions.
    """

    VERSION: ClassVar[str] = "version"
    SIGNED_EXTENSIONS: ClassVar[str] = "signed_extensions"

    field: str
    change: Any


@dataclass(frozen=True)
class ReducedExtrinsic:
    """The extrinsic format: version and signed extensions."""

    version: int
    signed_extensions: tuple[ReducedSignedExtension, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "signed_extensions", tuple(self.signed_extensions))

    def comparison(self, other: ReducedExtrinsic) -> list[ReducedExtrinsicChange]:
        """Changes from ``self`` to ``other``; empty when alike."""
        changes = []
        if self.version != other.version:
            changes.append(
                ReducedExtrinsicChange(
                    ReducedExtrinsicChange.VERSION, ValueChange(self.version, other.version)
                )
            )
        extension_changes = diff_lists(
            self.signed_extensions,
            other.signed_extensions,
            lambda ext: ext,
            lambda a, b: a.comparison(b),
        )
        if extension_changes:
            changes.append(
                ReducedExtrinsicChange(
                    ReducedExtrinsicChange.SIGNED_EXTENSIONS, tuple(extension_changes)
                )
            )
        return changes


@dataclass(frozen=True)
class ReducedRuntimeChange:
    """Changes to the extrinsic format or to the pallets of a runtime.

    For ``EXTRINSIC`` the changes are ``ReducedExtrinsicChange`` items;
    for ``PALLETS`` they are ``MapChange`` items keyed by pallet id.
    """

    EXTRINSIC: ClassVar[str] = "extrinsic"
    PALLETS: ClassVar[str] = "pallets"

    field: str
    changes: tuple[Any, ...]


@dataclass
class ReducedRuntime:
    """A runtime reduced to what matters when comparing it with another."""

    extrinsic: ReducedExtrinsic
    pallets: dict[int, ReducedPallet] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not isinstance(self.pallets, dict):
            self.pallets = dict(self.pallets) if isinstance(self.pallets, Mapping) else {
                pallet.index: pallet for pallet in self.pallets
            }

    def get_pallet_by_name(self, pallet_name: str) -> ReducedPallet | None:
        """Find a pallet by name, ignoring case. Prefer ``get_pallet_by_id``."""
        wanted = _ascii_lower(pallet_name)
        return next((p for p in self.pallets.values() if p.name.lower() == wanted), None)

    def get_pallet_by_id(self, pallet_id: int) -> ReducedPallet | None:
        """The pallet with the given index, if any."""
        return self.pallets.get(pallet_id)

    def comparison(self, other: ReducedRuntime) -> list[ReducedRuntimeChange]:
        """Changes from ``self`` to ``other``: extrinsic first, then pallets."""
        changes = []
        extrinsic_changes = self.extrinsic.comparison(other.extrinsic)
        if extrinsic_changes:
            changes.append(
                ReducedRuntimeChange(ReducedRuntimeChange.EXTRINSIC, tuple(extrinsic_changes))
            )
        pallet_changes = diff_maps(
            self.pallets, other.pallets, lambda pallet: pallet, lambda a, b: a.comparison(b)
        )
        if pallet_changes:
            changes.append(
                ReducedRuntimeChange(ReducedRuntimeChange.PALLETS, tuple(pallet_changes))
            )
        return changes

    def __str__(self) -> str:
        body = "".join(f"{self.pallets[key]}\n" for key in sorted(self.pallets))
        return "ReducedRuntime:\n" + body