"""Interfaces for the collaborators that the workflow depends on."""

from typing import Any, IO, Optional

from typing_extensions import Protocol

from ..domain.submission import Submission


class SubmissionClient(Protocol):
    """Persists a finished :class:`.Submission`."""

    def submit(self, submission: Submission,
               token: Optional[str] = None) -> str:
        """
        Dispatch a submission.

        Returns
        -------
        str
            The identifier assigned by the persistence collaborator.

        Raises
        ------
        :class:`.ValidationRejected`
            The content was refused; ``errors`` holds field-level messages.
        :class:`.TransientFailure`
            Nothing was persisted, and it is safe to try again.
        :class:`.Fatal`
            Nothing was persisted, and trying again will not help.

        """
        ...


class FileStore(Protocol):
    """Keeps the bytes of uploaded files."""

    def put(self, stream: IO[bytes], filename: str) -> Any:
        """Store the content of ``stream`` and return a handle to it."""
        ...

    def open(self, handle: Any) -> IO[bytes]:
        """Open stored content for reading."""
        ...
