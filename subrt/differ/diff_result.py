"""The result of comparing two reduced runtimes."""

from __future__ import annotations

import logging

from .diff_analyzer import DiffAnalyzer
from .reduced_runtime import ReducedRuntime
from .runtime_change_wrapper import ChangedWrapper, ReducedRuntimeChangeWrapper

log = logging.getLogger(__name__)


def _flag(value: bool | None, missing: str) -> str:
    return missing if value is None else str(value).lower()


class ReducedDiffResult:
    """The changes from ``runtime_a`` (the reference) to ``runtime_b``, and their analysis.

    ``changes`` is ``None`` when both runtimes are alike.
    """

    def __init__(self, runtime_a: ReducedRuntime, runtime_b: ReducedRuntime) -> None:
        self.runtime_a = runtime_a
        self.runtime_b = runtime_b
        self.changes: ChangedWrapper | None = None
        self._require_bump: bool | None = None
        self._compatible: bool | None = None

        runtime_changes = runtime_a.comparison(runtime_b)
        if runtime_changes:
            self.changes = ChangedWrapper(
                ReducedRuntimeChangeWrapper(tuple(runtime_changes), runtime_a, runtime_b)
            )
            analyzer = DiffAnalyzer(self.changes)
            self._require_bump = analyzer.require_tx_version_bump()
            self._compatible = analyzer.compatible()
        else:
            self._require_bump = False
            self._compatible = True

        log.debug("require_transaction_version_bump: %s", self._require_bump)
        log.debug("compatible: %s", self._compatible)

    def require_transaction_version_bump(self) -> bool:
        """Whether ``runtime_b`` needs a ``transaction_version`` bump."""
        if self._require_bump is None:
            raise RuntimeError("the diff was not analysed")
        return self._require_bump

    def compatible(self) -> bool:
        """Whether ``runtime_b`` keeps the API of ``runtime_a`` compatible."""
        if self._compatible is None:
            raise RuntimeError("the diff was not analysed")
        return self._compatible

    def __str__(self) -> str:
        head = "No change detected\n" if self.changes is None else str(self.changes)
        return (
            head
            + "SUMMARY:\n"
            + f"{'- Compatible':.<35}: {_flag(self._compatible, 'not computed')}\n"
            + f"{'- Require transaction_version bump':.<35}: "
            + f"{_flag(self._require_bump, 'n/a')}\n"
        )