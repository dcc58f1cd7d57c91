# utils_events.py

from typing import Callable, List


class Notifier:
    """
    Ordered list of subscribers for one kind of change.
    emit() calls every subscriber synchronously, in registration order.
    """
    __slots__ = ("_name", "_callbacks")

    def __init__(self, name: str = ""):
        self._name = name
        self._callbacks: List[Callable] = []

    def connect(self, callback: Callable) -> Callable:
        if not callable(callback):
            raise TypeError(f"Notifier({self._name}): subscriber must be callable, got {callback!r}")
        self._callbacks.append(callback)
        return callback

    def disconnect(self, callback: Callable) -> bool:
        try:
            self._callbacks.remove(callback)
        except ValueError:
            return False
        return True

    def emit(self, *args) -> None:
        # Snapshot so a subscriber may disconnect itself while being notified
        for callback in tuple(self._callbacks):
            callback(*args)

    def __len__(self) -> int:
        return len(self._callbacks)

    def __repr__(self):
        return f"Notifier({self._name!r}, subscribers={len(self._callbacks)})"
