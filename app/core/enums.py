from enum import Enum


class RequestStatus(str, Enum):
    waiting = "waiting"
    delivering = "delivering"
    completed = "completed"


class Priority(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"

    @property
    def rank(self) -> int:
        return PRIORITY_RANK[self]


PRIORITY_RANK = {
    Priority.low: 1,
    Priority.medium: 2,
    Priority.high: 3,
}
