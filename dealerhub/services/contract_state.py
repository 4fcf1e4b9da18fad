"""Contract status graph, enforced only when strict transitions are configured."""

from __future__ import annotations

from dealerhub.core.exceptions import BadRequestError
from dealerhub.models import ContractStatus


class InvalidTransitionError(BadRequestError):
    """Raised when a disallowed state transition is attempted."""


class StateMachine:
    """Small transition table keyed by current state."""

    def __init__(self, transitions: dict[ContractStatus, set[ContractStatus]]) -> None:
        self._transitions = transitions

    def can_transition(self, current: ContractStatus, target: ContractStatus) -> bool:
        if current == target:
            return True
        return target in self._transitions.get(current, set())

    def assert_transition(self, current: ContractStatus, target: ContractStatus) -> None:
        if not self.can_transition(current=current, target=target):
            raise InvalidTransitionError(f"Transition not allowed: {current.value} -> {target.value}")


CONTRACT_TRANSITIONS: dict[ContractStatus, set[ContractStatus]] = {
    ContractStatus.CAR_INSPECTION: {ContractStatus.PRICE_NEGOTIATION, ContractStatus.CONTRACT_FAILED},
    ContractStatus.PRICE_NEGOTIATION: {
        ContractStatus.CONTRACT_DRAFT,
        ContractStatus.CONTRACT_SUCCESSFUL,
        ContractStatus.CONTRACT_FAILED,
    },
    ContractStatus.CONTRACT_DRAFT: {ContractStatus.CONTRACT_SUCCESSFUL, ContractStatus.CONTRACT_FAILED},
    ContractStatus.CONTRACT_SUCCESSFUL: set(),
    ContractStatus.CONTRACT_FAILED: set(),
}

contract_state_machine = StateMachine(CONTRACT_TRANSITIONS)
