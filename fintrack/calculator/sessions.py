"""Mini README: Per-session ownership of calculator evaluators.

Each browser session drives exactly one ``SequentialEvaluator``; this
registry hands it out by session id, creating a fresh evaluator on first
use. Evaluators are never shared between sessions.

The registry holds at most ``max_sessions`` evaluators. Using a session
marks it as most recent and creating one past the limit evicts the session
that has gone unused the longest.
"""

from __future__ import annotations

from collections import OrderedDict
from typing import Iterable, Optional

from ..logging_utils import get_logger
from .evaluator import CalculatorState, SequentialEvaluator

LOGGER = get_logger(__name__)

DEFAULT_MAX_SESSIONS = 1000


def _clean(session_id: str) -> str:
    session_id = session_id.strip()
    if not session_id:
        raise ValueError("Calculator session id must not be blank.")
    return session_id


class CalculatorSessions:
    """Map session identifiers to their evaluators, least recently used first."""

    def __init__(self, max_sessions: int = DEFAULT_MAX_SESSIONS) -> None:
        if max_sessions < 1:
            raise ValueError("A calculator registry must allow at least one session.")
        self.max_sessions = max_sessions
        self._evaluators: "OrderedDict[str, SequentialEvaluator]" = OrderedDict()

    def get(self, session_id: str) -> SequentialEvaluator:
        """Return the session's evaluator, creating it when missing."""

        session_id = _clean(session_id)
        evaluator = self._evaluators.get(session_id)
        if evaluator is not None:
            self._evaluators.move_to_end(session_id)
            return evaluator
        evaluator = SequentialEvaluator()
        self._evaluators[session_id] = evaluator
        LOGGER.debug("Created calculator for session %s", session_id)
        while len(self._evaluators) > self.max_sessions:
            evicted, _ = self._evaluators.popitem(last=False)
            LOGGER.debug("Evicted idle calculator for session %s", evicted)
        return evaluator

    def peek(self, session_id: str) -> Optional[SequentialEvaluator]:
        """Return the session's evaluator without creating or touching it."""

        return self._evaluators.get(_clean(session_id))

    def state_of(self, session_id: str) -> CalculatorState:
        """Current state for ``session_id``; unknown sessions read as a blank calculator."""

        evaluator = self.peek(session_id)
        return evaluator.state if evaluator is not None else CalculatorState()

    def reset(self, session_id: str) -> None:
        """Discard the session's evaluator; the next ``get`` starts fresh."""

        if self._evaluators.pop(session_id.strip(), None) is not None:
            LOGGER.debug("Discarded calculator for session %s", session_id)

    def active_sessions(self) -> Iterable[str]:
        return sorted(self._evaluators.keys())

    def __len__(self) -> int:
        return len(self._evaluators)
