"""Command lifecycle events.

Listeners are registered on an ``EventDispatcher`` by whoever embeds the CLI;
commands only fire events and never look at what listeners return.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List

logger = logging.getLogger(__name__)

COMMAND_EVENT = "command"

Listener = Callable[["CommandEvent"], Any]


@dataclass
class CommandEvent:
    """Fired once when a command starts, before it does any work."""
    name: str
    command_name: str
    args: Any = None


@dataclass
class EventDispatcher:
    """Maps event names to the listeners interested in them."""
    listeners: Dict[str, List[Listener]] = field(default_factory=dict)

    def add_listener(self, event_name: str, listener: Listener) -> None:
        self.listeners.setdefault(event_name, []).append(listener)

    def dispatch(self, event_name: str, event: CommandEvent) -> None:
        """Call every listener of ``event_name`` in registration order.

        A listener that raises is logged and the remaining listeners still run.
        """
        for listener in self.listeners.get(event_name, []):
            try:
                listener(event)
            except Exception as exc:  # pylint: disable=broad-exception-caught
                logger.warning(
                    "Listener %r for event '%s' failed: %s",
                    listener,
                    event_name,
                    exc,
                )
