from __future__ import annotations

from typing import Dict, List

from app.core.enums import RequestStatus
from app.core.errors import InvalidTransitionError


ALLOWED_TRANSITIONS: Dict[RequestStatus, List[RequestStatus]] = {
    RequestStatus.waiting: [RequestStatus.delivering],
    RequestStatus.delivering: [RequestStatus.completed],
    RequestStatus.completed: [],
}

INITIAL_STATE = RequestStatus.waiting


def get_allowed_next(state: RequestStatus) -> List[RequestStatus]:
    return ALLOWED_TRANSITIONS.get(state, [])


def is_terminal(state: RequestStatus) -> bool:
    return not get_allowed_next(state)


def validate_transition(current_state: RequestStatus, target_state: RequestStatus) -> None:
    if target_state not in get_allowed_next(current_state):
        raise InvalidTransitionError(current_state.value, target_state.value)
