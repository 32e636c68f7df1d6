from pathlib import Path
from typing import Callable


class NavigationHistory:
    """
    Last-in-first-out record of previously visited directories.

    The stack does not de-duplicate entries. Callers push only when they
    actually leave a directory.
    """

    def __init__(self) -> None:
        self._stack: list[Path] = []

    def push(self, path: Path) -> None:
        self._stack.append(path)

    def pop(self) -> Path | None:
        """Removes and returns the most recent entry, or None when empty."""
        if not self._stack:
            return None
        return self._stack.pop()

    def peek(self) -> Path | None:
        if not self._stack:
            return None
        return self._stack[-1]

    def is_empty(self) -> bool:
        return not self._stack

    def prune(self, keep: Callable[[Path], bool], current: Path | None = None) -> int:
        """
        Drops entries for which ``keep`` is false, then collapses repeated
        neighbours and any top entries equal to ``current``.

        Returns:
            The number of removed entries.
        """
        before = len(self._stack)
        pruned: list[Path] = []
        for path in self._stack:
            if keep(path) and (not pruned or pruned[-1] != path):
                pruned.append(path)
        while pruned and pruned[-1] == current:
            pruned.pop()
        self._stack = pruned
        return before - len(pruned)

    def clear(self) -> None:
        self._stack.clear()

    def entries(self) -> list[Path]:
        """Returns a copy of the stack, oldest first."""
        return list(self._stack)

    def __len__(self) -> int:
        return len(self._stack)
