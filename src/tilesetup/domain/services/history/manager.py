"""Undo/redo history over reversible commands.

The engine keeps two bounded stacks. Executing a new command clears the
redo stack; when the undo stack grows past its limit the oldest entries are
dropped without error. Consecutive mergeable commands issued within the
merge window collapse into one entry.
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from typing import Callable

from .commands import BatchCommand, Command, CommandResult

logger = logging.getLogger(__name__)


class CommandIdGenerator:
    """Sequential command ids (``cmd_1``, ``cmd_2``, ...) owned by one engine."""

    def __init__(self, prefix: str = "cmd") -> None:
        self.prefix = prefix
        self._counter = itertools.count(1)

    def __call__(self) -> str:
        return f"{self.prefix}_{next(self._counter)}"


@dataclass(frozen=True)
class HistoryConfig:
    """History limits.

    Attributes:
        max_undo_stack_size: Oldest entries beyond this are dropped.
        enable_merging: Whether consecutive mergeable commands collapse.
        merge_window: Largest gap between two commands' timestamps that
            still allows merging.
    """

    max_undo_stack_size: int = 50
    enable_merging: bool = True
    merge_window: timedelta = timedelta(seconds=1)

    def __post_init__(self) -> None:
        if self.max_undo_stack_size < 1:
            raise ValueError("History must keep at least one undo entry")
        if self.merge_window < timedelta(0):
            raise ValueError("Merge window must be non-negative")


class HistoryEventType(str, Enum):
    EXECUTE = "execute"
    UNDO = "undo"
    REDO = "redo"
    CLEAR = "clear"


@dataclass(frozen=True)
class HistoryChangeEvent:
    """Notification sent to history listeners after every change."""

    type: HistoryEventType
    command: Command | None
    can_undo: bool
    can_redo: bool
    undo_stack_size: int
    redo_stack_size: int


HistoryListener = Callable[[HistoryChangeEvent], None]


class HistoryEngine:
    """Executes commands and tracks them for undo and redo.

    Example:
        history = HistoryEngine()
        history.begin_group("Move selection")
        for tile_id in selection:
            history.execute(TileMoveCommand(handle, tile_id, dx, dy, history.next_id()))
        history.end_group()
        history.undo()  # reverts the whole selection
    """

    def __init__(
        self,
        config: HistoryConfig | None = None,
        id_generator: Callable[[], str] | None = None,
    ) -> None:
        self.config = config or HistoryConfig()
        self._next_id = id_generator or CommandIdGenerator()
        self._undo_stack: list[Command] = []
        self._redo_stack: list[Command] = []
        self._listeners: list[HistoryListener] = []
        self._grouping = False
        self._group: list[Command] = []
        self._group_description = ""

    def next_id(self) -> str:
        """Next command id from this engine's generator."""
        return self._next_id()

    # -------------------------------------------------------------------------
    # Execute / undo / redo
    # -------------------------------------------------------------------------

    def execute(self, command: Command) -> CommandResult:
        """Run a command and record it.

        Failed commands are not recorded. Inside a group the command runs
        immediately but is held back until ``end_group``.
        """
        result = command.execute()
        if not result.success:
            logger.debug(f"Command '{command.description}' failed: {result.error}")
            return result

        if self._grouping:
            self._group.append(command)
            return result

        if self._try_merge(command):
            return result

        self._push(command)
        return result

    def undo(self) -> CommandResult | None:
        """Reverse the most recent entry; None when there is nothing to undo.

        A failed undo leaves the entry on the undo stack.
        """
        if not self._undo_stack:
            return None
        command = self._undo_stack.pop()
        result = command.undo()
        if result.success:
            self._redo_stack.append(command)
        else:
            logger.warning(f"Undo of '{command.description}' failed: {result.error}")
            self._undo_stack.append(command)
        self._notify(HistoryEventType.UNDO, command)
        return result

    def redo(self) -> CommandResult | None:
        """Re-apply the most recently undone entry; None when there is none.

        A failed redo leaves the entry on the redo stack.
        """
        if not self._redo_stack:
            return None
        command = self._redo_stack.pop()
        result = command.execute()
        if result.success:
            self._undo_stack.append(command)
        else:
            logger.warning(f"Redo of '{command.description}' failed: {result.error}")
            self._redo_stack.append(command)
        self._notify(HistoryEventType.REDO, command)
        return result

    def _try_merge(self, command: Command) -> bool:
        if not self.config.enable_merging or not self._undo_stack:
            return False
        last = self._undo_stack[-1]
        if abs(command.timestamp - last.timestamp) >= self.config.merge_window:
            return False
        if not last.can_merge_with(command):
            return False
        merged = last.merge_with(command)
        if merged is None:
            return False
        self._undo_stack[-1] = merged
        self._redo_stack.clear()
        self._notify(HistoryEventType.EXECUTE, merged)
        return True

    def _push(self, command: Command) -> None:
        self._undo_stack.append(command)
        overflow = len(self._undo_stack) - self.config.max_undo_stack_size
        if overflow > 0:
            del self._undo_stack[:overflow]
        self._redo_stack.clear()
        self._notify(HistoryEventType.EXECUTE, command)

    # -------------------------------------------------------------------------
    # Grouping
    # -------------------------------------------------------------------------

    @property
    def is_grouping(self) -> bool:
        return self._grouping

    def begin_group(self, description: str = "Group") -> None:
        """Start collecting executed commands into one undo entry.

        An open group is closed first.
        """
        if self._grouping:
            logger.warning(
                f"Group '{self._group_description}' still open; closing it before '{description}'"
            )
            self.end_group()
        self._grouping = True
        self._group = []
        self._group_description = description

    def end_group(self) -> Command | None:
        """Close the group and record what it collected.

        Returns:
            The recorded entry: the single command itself when only one was
            collected, a ``BatchCommand`` otherwise, or None for an empty or
            missing group.
        """
        if not self._grouping:
            return None
        self._grouping = False
        collected, self._group = self._group, []
        if not collected:
            return None

        entry = (
            collected[0]
            if len(collected) == 1
            else BatchCommand(collected, self._group_description, command_id=self.next_id())
        )
        self._push(entry)
        return entry

    def cancel_group(self) -> None:
        """Undo everything collected in the open group and discard it."""
        if not self._grouping:
            return
        for command in reversed(self._group):
            command.undo()
        self._grouping = False
        self._group = []

    @contextmanager
    def group(self, description: str = "Group") -> Iterator[None]:
        """Context manager around ``begin_group``/``end_group``.

        An exception inside the block cancels the group.
        """
        self.begin_group(description)
        try:
            yield
        except BaseException:
            self.cancel_group()
            raise
        self.end_group()

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def can_undo(self) -> bool:
        return bool(self._undo_stack)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo_stack)

    @property
    def undo_stack_size(self) -> int:
        return len(self._undo_stack)

    @property
    def redo_stack_size(self) -> int:
        return len(self._redo_stack)

    @property
    def last_undo_description(self) -> str | None:
        return self._undo_stack[-1].description if self._undo_stack else None

    @property
    def last_redo_description(self) -> str | None:
        return self._redo_stack[-1].description if self._redo_stack else None

    def undo_history(self) -> list[str]:
        """Descriptions of the undo stack, most recent first."""
        return [command.description for command in reversed(self._undo_stack)]

    def clear(self) -> None:
        """Drop both stacks and any open group."""
        self._undo_stack.clear()
        self._redo_stack.clear()
        self._grouping = False
        self._group = []
        self._notify(HistoryEventType.CLEAR, None)

    def clear_redo(self) -> None:
        self._redo_stack.clear()

    # -------------------------------------------------------------------------
    # Listeners
    # -------------------------------------------------------------------------

    def on_change(self, listener: HistoryListener) -> None:
        self._listeners.append(listener)

    def off_change(self, listener: HistoryListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self, event_type: HistoryEventType, command: Command | None) -> None:
        event = HistoryChangeEvent(
            type=event_type,
            command=command,
            can_undo=self.can_undo,
            can_redo=self.can_redo,
            undo_stack_size=self.undo_stack_size,
            redo_stack_size=self.redo_stack_size,
        )
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception("History change listener failed")
