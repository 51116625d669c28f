"""Store change listener interface."""

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from todolist.core.store import StoreEvent


class StoreListener(Protocol):
    """Anything notified after the task store changes."""

    def __call__(self, event: "StoreEvent") -> None:
        """Called synchronously, after the change, before the mutating call returns."""
        ...
