"""Canonical state transition tables for proposals and invoices."""

from __future__ import annotations

from dealdesk.core.exceptions import InvalidTransitionError
from dealdesk.models.enums import INVOICE_STATUS_VALUES, PROPOSAL_STATUS_VALUES


class StateMachine:
    """Simple in-memory state machine over string states."""

    def __init__(self, transitions: dict[str, set[str]]) -> None:
        self._transitions = transitions

    @property
    def states(self) -> set[str]:
        return set(self._transitions)

    def can_transition(self, current: str, target: str) -> bool:
        return target in self._transitions.get(current, set())

    def assert_transition(self, current: str, target: str) -> None:
        if not self.can_transition(current=current, target=target):
            raise InvalidTransitionError(f"Transition not allowed: {current} -> {target}")


# Proposal statuses are set by explicit user action; any proposal state may
# move to any other. "invoice" is only reachable through conversion.
PROPOSAL_MACHINE = StateMachine({status: set(PROPOSAL_STATUS_VALUES) for status in PROPOSAL_STATUS_VALUES})

INVOICE_MACHINE = StateMachine({status: set(INVOICE_STATUS_VALUES) for status in INVOICE_STATUS_VALUES})
