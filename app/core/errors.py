class RegistryError(Exception):
    """Base class for every error the request registry raises."""


class ValidationError(RegistryError):
    """Malformed input: empty text, coordinates out of range, unknown enum value."""


class NotFoundError(RegistryError):
    def __init__(self, request_id: str):
        self.request_id = request_id
        super().__init__(f"Delivery request {request_id} not found")


class InvalidTransitionError(RegistryError):
    def __init__(self, current: str, target: str):
        self.current = current
        self.target = target
        super().__init__(f"Invalid transition from {current} to {target}")


class AuthorizationError(RegistryError):
    def __init__(self, request_id: str, delivery_person_id: str):
        self.request_id = request_id
        self.delivery_person_id = delivery_person_id
        super().__init__(
            f"Delivery person {delivery_person_id} is not assigned to request {request_id}"
        )
