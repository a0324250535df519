from typing import Optional


class TopologyControlError(Exception):
    """
    Base class for failures while controlling a topology through its master.
    Carries the job and command involved so the message is diagnosable on its own.
    """
    def __init__(self, message: str, job_id: Optional[str] = None, command: Optional[str] = None):
        self.message = message
        self.job_id = job_id
        self.command = command
        super().__init__(message)


class DispatchError(TopologyControlError):
    """
    Raised when a command cannot be delivered to the master or the master
    answers with anything other than HTTP 200.
    """


class ResolutionError(DispatchError):
    """Raised when the coordination store holds no master location for a job."""


class MalformedTargetError(DispatchError):
    """Raised when a request target cannot be parsed as a valid URL."""


class UninitializedError(TopologyControlError):
    """Raised when a job has no physical plan yet (not fully deployed)."""


class InvalidStateError(TopologyControlError):
    """
    Raised when a state transition precondition does not hold.
    """
    def __init__(
        self,
        message: str,
        job_id: Optional[str] = None,
        command: Optional[str] = None,
        observed_state: Optional[str] = None,
        required_state: Optional[str] = None,
    ):
        self.observed_state = observed_state
        self.required_state = required_state
        super().__init__(message, job_id=job_id, command=command)


class CoordinationStoreError(TopologyControlError):
    """Raised when a coordination store record exists but cannot be read."""


def using_command(command: Optional[str]) -> str:
    """Message suffix naming the command an error belongs to."""
    return f" using command `{command}`" if command else ""
