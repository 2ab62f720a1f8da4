"""Exceptions raised by the task store."""


class TaskStoreError(Exception):
    """Base exception for all task store failures."""

    def __init__(self, message: str, owner: str, name: str):
        self.owner = owner
        self.name = name
        super().__init__(message)


class TaskAlreadyExistsError(TaskStoreError):
    """Raised when creating a task whose name is already taken by the owner."""

    def __init__(self, owner: str, name: str):
        super().__init__(f"Task '{name}' already exists for user '{owner}'", owner, name)


class TaskNotFoundError(TaskStoreError):
    """Raised when the owner has no task with the requested name."""

    def __init__(self, owner: str, name: str):
        super().__init__(f"Task '{name}' not found for user '{owner}'", owner, name)


class TaskAccessDeniedError(TaskStoreError):
    """Raised when someone other than the owner tries to change a task."""

    def __init__(self, requester: str, owner: str, name: str):
        self.requester = requester
        super().__init__(
            f"User '{requester}' may not modify task '{name}' of user '{owner}'", owner, name
        )


class InvalidTaskStateError(TaskStoreError):
    """Raised when a transition is not allowed from the task's current state."""

    def __init__(self, owner: str, name: str, state: str, action: str):
        self.state = state
        self.action = action
        super().__init__(f"Cannot {action} task '{name}' of user '{owner}' in state {state}", owner, name)
