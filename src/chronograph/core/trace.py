"""
Trace hooks for the transformation engine.

The engine never prints. Every notable step is logged at DEBUG level and,
when the caller passes a hook, forwarded to it as ``(event, payload)`` so a
UI or test can observe root inference, state propagation and dropped edges.
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)

TraceHook = Callable[[str, Dict[str, Any]], None]


def emit(hook: Optional[TraceHook], event: str, **payload: Any) -> None:
    """Log an engine event and forward it to the hook, if any."""
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("%s %s", event, payload)
    if hook is not None:
        hook(event, payload)


class TraceRecorder:
    """
    Hook that keeps every event in memory.

    Handy for tests and for dumping a debug trace from the CLI.
    """

    def __init__(self):
        self.events: List[Tuple[str, Dict[str, Any]]] = []

    def __call__(self, event: str, payload: Dict[str, Any]) -> None:
        self.events.append((event, payload))

    def named(self, event: str) -> List[Dict[str, Any]]:
        """Payloads of all events with the given name."""
        return [p for e, p in self.events if e == event]

    def clear(self) -> None:
        self.events.clear()
