import pytest

from app.core.enums import RequestStatus
from app.core.errors import InvalidTransitionError
from app.services.workflow import (
    INITIAL_STATE,
    get_allowed_next,
    is_terminal,
    validate_transition,
)


def test_initial_state_is_waiting():
    assert INITIAL_STATE == RequestStatus.waiting


def test_allowed_next_follows_single_path():
    assert get_allowed_next(RequestStatus.waiting) == [RequestStatus.delivering]
    assert get_allowed_next(RequestStatus.delivering) == [RequestStatus.completed]
    assert get_allowed_next(RequestStatus.completed) == []


def test_only_completed_is_terminal():
    assert is_terminal(RequestStatus.completed)
    assert not is_terminal(RequestStatus.waiting)
    assert not is_terminal(RequestStatus.delivering)


@pytest.mark.parametrize(
    "current,target",
    [
        (RequestStatus.waiting, RequestStatus.delivering),
        (RequestStatus.delivering, RequestStatus.completed),
    ],
)
def test_legal_transitions_pass(current, target):
    validate_transition(current, target)


@pytest.mark.parametrize(
    "current,target",
    [
        (RequestStatus.waiting, RequestStatus.completed),
        (RequestStatus.waiting, RequestStatus.waiting),
        (RequestStatus.delivering, RequestStatus.waiting),
        (RequestStatus.delivering, RequestStatus.delivering),
        (RequestStatus.completed, RequestStatus.waiting),
        (RequestStatus.completed, RequestStatus.delivering),
    ],
)
def test_other_transitions_rejected(current, target):
    with pytest.raises(InvalidTransitionError) as exc_info:
        validate_transition(current, target)

    assert exc_info.value.current == current.value
    assert exc_info.value.target == target.value
