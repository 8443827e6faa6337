"""Exceptions raised by the submission workflow."""

from typing import Dict, Optional


class InvalidTransition(RuntimeError):
    """Raised when a navigation operation is not permitted in this state."""

    def __init__(self, step: object, operation: str) -> None:
        """Use the current step and the attempted operation to build a message."""
        self.step = step
        self.operation = operation
        super(InvalidTransition, self).__init__(
            f'Cannot {operation} from {step}'
        )


class StepNotActive(InvalidTransition):
    """A draft mutation was attempted while its step was not active."""


class NoSuchAuthor(LookupError):
    """An operation referred to an author that is not on the draft."""


class AssemblyFailed(RuntimeError):
    """
    The draft could not be converted into a :class:`.Submission`.

    This indicates a defect: the step gates should have made it impossible.
    """


class SubmitError(RuntimeError):
    """Base class for failures reported by a submission client."""


class ValidationRejected(SubmitError):
    """The persistence collaborator rejected the submission's content."""

    def __init__(self, errors: Optional[Dict[str, str]] = None,
                 message: str = 'Submission rejected') -> None:
        """Keep the field-level errors reported by the server."""
        self.errors = errors if errors is not None else {}
        super(ValidationRejected, self).__init__(message)


class TransientFailure(SubmitError):
    """A temporary failure; the same submission may be dispatched again."""


class Fatal(SubmitError):
    """An unrecoverable failure; the submission should be abandoned."""
