"""
Per-target operation state with supersede semantics.

Each (operation kind, target) pair moves idle -> in-flight -> success|failed.
Starting a new operation for the same target issues a new ticket; the
result of an older ticket is discarded when it eventually arrives.
"""

import itertools
import logging
from dataclasses import dataclass
from typing import Dict, Hashable, Optional, Tuple

from creative_assistant.core.enums import OperationKind, OperationStatus

logger = logging.getLogger(__name__)

Target = Hashable


@dataclass(frozen=True)
class Ticket:
    """Handle for one started operation."""

    kind: OperationKind
    target: Target
    serial: int


@dataclass(frozen=True)
class OperationState:
    """Snapshot of one target's operation state."""

    status: OperationStatus = OperationStatus.IDLE
    error: Optional[str] = None
    serial: Optional[int] = None

    @property
    def in_flight(self) -> bool:
        return self.status is OperationStatus.IN_FLIGHT


IDLE = OperationState()


class OperationTracker:
    """Tracks the latest operation per (kind, target)."""

    def __init__(self):
        self._states: Dict[Tuple[OperationKind, Target], OperationState] = {}
        self._serials = itertools.count(1)

    def state(self, kind: OperationKind, target: Target) -> OperationState:
        """Current state for a target (IDLE if nothing was ever started)."""
        return self._states.get((kind, target), IDLE)

    def begin(self, kind: OperationKind, target: Target) -> Ticket:
        """
        Start an operation, superseding any in-flight one for the same target.

        Returns:
            Ticket that must be presented to succeed() or fail()
        """
        previous = self.state(kind, target)
        ticket = Ticket(kind=kind, target=target, serial=next(self._serials))
        if previous.in_flight:
            logger.info(
                "Superseding in-flight %s operation for %s (ticket %s -> %s)",
                kind.value, target, previous.serial, ticket.serial,
            )
        self._states[(kind, target)] = OperationState(
            status=OperationStatus.IN_FLIGHT, serial=ticket.serial
        )
        return ticket

    def is_current(self, ticket: Ticket) -> bool:
        """True if no newer operation has started for the ticket's target."""
        return self.state(ticket.kind, ticket.target).serial == ticket.serial

    def succeed(self, ticket: Ticket) -> bool:
        """
        Mark a ticket's operation successful.

        Returns:
            False if the ticket was superseded; the caller must discard its result
        """
        if not self.is_current(ticket):
            logger.info("Discarding superseded %s result for %s", ticket.kind.value, ticket.target)
            return False
        self._states[(ticket.kind, ticket.target)] = OperationState(
            status=OperationStatus.SUCCESS, serial=ticket.serial
        )
        return True

    def fail(self, ticket: Ticket, message: str) -> bool:
        """
        Mark a ticket's operation failed with a user-facing message.

        Returns:
            False if the ticket was superseded (state left untouched)
        """
        if not self.is_current(ticket):
            logger.info("Ignoring failure of superseded %s operation for %s", ticket.kind.value, ticket.target)
            return False
        self._states[(ticket.kind, ticket.target)] = OperationState(
            status=OperationStatus.FAILED, error=message, serial=ticket.serial
        )
        return True

    def reset(self, kind: OperationKind, target: Target) -> None:
        """Forget a target's state; any in-flight result becomes stale."""
        self._states.pop((kind, target), None)


FAILURE_MESSAGES = {
    OperationKind.IDEAS: "Failed to generate ideas. Please try again.",
    OperationKind.IMAGE: "Failed to generate the image. Please try again.",
    OperationKind.SCRIPT: "Failed to generate the script. Please try again.",
    OperationKind.ASSESSMENT: "Failed to assess the work. Please try again.",
    OperationKind.DESIGN_ASSESSMENT: "Failed to assess the design. Please try again.",
}
