"""Domain errors raised by the inventory, job and account operations.

Every error is a ``ValueError`` so callers that only care about
"the operation was refused" can catch that, while the UI layer can
pick a message per subclass.
"""


class GymFixError(ValueError):
    """Base class for refused operations. No state was changed."""


class PermissionDenied(GymFixError):
    def __init__(self, permission: str, user_name: str = ""):
        self.permission = permission
        who = user_name or "No user is logged in"
        if user_name:
            super().__init__(f"{who} lacks permission {permission}")
        else:
            super().__init__(f"{who}; {permission} required")


class AuthenticationFailed(GymFixError):
    def __init__(self, email: str):
        self.email = email
        super().__init__("Invalid email or password")


class NotFound(GymFixError):
    def __init__(self, kind: str, entity_id: str):
        self.kind = kind
        self.entity_id = entity_id
        super().__init__(f"{kind} {entity_id} not found")


class ValidationFailed(GymFixError):
    """Required fields missing or inconsistent input."""


class InvalidJobState(GymFixError):
    """The job's lifecycle status does not allow the operation."""


class InsufficientStock(GymFixError):
    def __init__(self, part_name: str, available: int, needed: int):
        self.part_name = part_name
        self.available = available
        self.needed = needed
        super().__init__(
            f"Insufficient stock for {part_name}: "
            f"have {available}, need {needed}"
        )


class InsufficientComponents(GymFixError):
    """Raised by assemble when one or more BOM lines are short.

    ``shortages`` lists ``(part_id, available, needed)`` for every short
    line, not only the first one.
    """

    def __init__(self, assembly_name: str,
                 shortages: list[tuple[str, int, int]]):
        self.assembly_name = assembly_name
        self.shortages = shortages
        detail = ", ".join(
            f"{pid} (have {have}, need {need})"
            for pid, have, need in shortages
        )
        super().__init__(
            f"Insufficient components to build {assembly_name}: {detail}"
        )


class InsufficientAssemblies(GymFixError):
    def __init__(self, assembly_name: str, available: int, needed: int):
        self.assembly_name = assembly_name
        self.available = available
        self.needed = needed
        super().__init__(
            f"Insufficient assembled {assembly_name} to dismantle: "
            f"have {available}, need {needed}"
        )
