from __future__ import annotations

import pytest

from dealerhub.core.exceptions import BadRequestError
from dealerhub.models import ContractStatus
from dealerhub.services.contract_state import InvalidTransitionError, StateMachine, contract_state_machine


def test_state_machine_allows_valid_transition():
    sm = StateMachine({ContractStatus.CAR_INSPECTION: {ContractStatus.PRICE_NEGOTIATION}})
    assert sm.can_transition(ContractStatus.CAR_INSPECTION, ContractStatus.PRICE_NEGOTIATION) is True
    sm.assert_transition(ContractStatus.CAR_INSPECTION, ContractStatus.PRICE_NEGOTIATION)


def test_state_machine_rejects_invalid_transition():
    sm = StateMachine({ContractStatus.CAR_INSPECTION: {ContractStatus.PRICE_NEGOTIATION}})
    with pytest.raises(InvalidTransitionError):
        sm.assert_transition(ContractStatus.CAR_INSPECTION, ContractStatus.CONTRACT_SUCCESSFUL)


def test_same_state_is_always_allowed():
    assert contract_state_machine.can_transition(
        ContractStatus.CONTRACT_SUCCESSFUL, ContractStatus.CONTRACT_SUCCESSFUL
    )


def test_terminal_states_have_no_exits():
    for terminal in (ContractStatus.CONTRACT_SUCCESSFUL, ContractStatus.CONTRACT_FAILED):
        for target in ContractStatus:
            if target != terminal:
                assert contract_state_machine.can_transition(terminal, target) is False


def test_invalid_transition_maps_to_bad_request():
    assert issubclass(InvalidTransitionError, BadRequestError)
    assert InvalidTransitionError.status_code == 400
