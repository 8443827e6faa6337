"""
The submission wizard state machine.

A :class:`.StepSequencer` owns the draft for one wizard session. It is the
only way to change the draft, and it only permits the changes that belong to
the step that is currently active. Moving forward requires that the current
step's gate passes; moving back never does.
"""

import logging
import threading
from enum import Enum
from functools import wraps
from typing import Any, Callable, Optional, TypeVar

from dataclasses import dataclass, field

from . import gate
from .assembler import assemble
from .attachments import AttachmentRegistry
from .domain.agent import Agent
from .domain.author import Author
from .domain.draft import ChecklistItem, SubmissionDraft
from .domain.files import FileRef, UploadedFile
from .domain.outcome import ValidationOutcome
from .domain.step import Step
from .domain.submission import Submission
from .exceptions import InvalidTransition, StepNotActive, AssemblyFailed, \
    SubmitError, ValidationRejected, TransientFailure, Fatal
from .services.base import FileStore, SubmissionClient

logger = logging.getLogger(__name__)

Func = TypeVar('Func', bound=Callable[..., Any])


class FinishStatus(Enum):
    """What happened when a session tried to finish."""

    SUBMITTED = 'submitted'
    REJECTED = 'rejected'
    """The persistence collaborator refused the content."""
    RETRYABLE = 'retryable'
    """A transient failure; finishing may be attempted again."""
    FAILED = 'failed'
    """The draft could not be assembled, or dispatch failed unexpectedly."""
    ABORTED = 'aborted'
    IN_PROGRESS = 'in_progress'
    """Another call is already finishing this session."""


@dataclass(frozen=True)
class FinishResult:
    """The result of :meth:`StepSequencer.finish`."""

    status: FinishStatus
    submission: Optional[Submission] = None
    persisted_id: Optional[str] = None
    outcome: ValidationOutcome = field(default_factory=ValidationOutcome)
    message: str = field(default_factory=str)


def during(step: Step) -> Callable[[Func], Func]:
    """Only allow the decorated draft mutation while ``step`` is active."""
    def decorator(func: Func) -> Func:
        @wraps(func)
        def inner(self: 'StepSequencer', *args: Any, **kwargs: Any) -> Any:
            self._check_idle(func.__name__)
            if self.step is not step:
                raise StepNotActive(self.step, func.__name__)
            return func(self, *args, **kwargs)
        return inner  # type: ignore
    return decorator


class StepSequencer:
    """
    Drives a single wizard session from START to a terminal step.

    Parameters
    ----------
    creator : :class:`.Agent`
        The party on whose behalf the submission is being made.
    client : :class:`.SubmissionClient`
        Used to persist the submission when the session finishes.
    store : :class:`.FileStore`
        Where to keep uploaded file content. Optional.
    token : str
        Passed through to ``client`` when the submission is dispatched.

    """

    def __init__(self, creator: Agent, client: SubmissionClient,
                 store: Optional[FileStore] = None,
                 token: Optional[str] = None) -> None:
        self.creator = creator
        self.client = client
        self.store = store
        self.token = token
        self.step = Step.START
        self.draft: Optional[SubmissionDraft] = SubmissionDraft()
        self.attachments = AttachmentRegistry(self.draft, store)
        self.outcome: Optional[ValidationOutcome] = None
        self.result: Optional[FinishResult] = None
        self._finishing = threading.Lock()

    def __repr__(self) -> str:
        return f'<StepSequencer {self.step.value}>'

    # --- Navigation ---

    def advance(self) -> ValidationOutcome:
        """
        Move to the next step if the current step's gate passes.

        Returns
        -------
        :class:`.ValidationOutcome`
            If this has errors, the step did not change.

        Raises
        ------
        :class:`.InvalidTransition`
            From CONFIRMATION (use :meth:`finish`) or a terminal step.

        """
        self._check_idle('advance')
        if self.step.is_terminal or self.step is Step.CONFIRMATION:
            raise InvalidTransition(self.step, 'advance')
        outcome = gate.evaluate(self.step, self.draft)
        if not outcome.passed:
            logger.warning('Cannot leave %s: %s', self.step.value,
                           outcome.errors)
            self.outcome = outcome
            return outcome
        logger.debug('Advance from %s to %s', self.step.value,
                     self.step.next.value)
        self.outcome = None
        self.step = self.step.next
        return outcome

    def retreat(self) -> None:
        """Return to the previous step; nothing entered is lost."""
        self._check_idle('retreat')
        previous = self.step.previous
        if previous is None:
            raise InvalidTransition(self.step, 'retreat')
        logger.debug('Retreat from %s to %s', self.step.value, previous.value)
        self.outcome = None
        self.step = previous

    def cancel(self) -> None:
        """Abandon the session and discard everything entered."""
        self._check_idle('cancel')
        if self.step.is_terminal:
            raise InvalidTransition(self.step, 'cancel')
        logger.debug('Cancel from %s', self.step.value)
        self._discard()
        self.step = Step.CANCELLED

    def review(self) -> ValidationOutcome:
        """Evaluate every step gate against the draft, without moving."""
        if self.draft is None:
            raise InvalidTransition(self.step, 'review')
        return gate.review(self.draft)

    def finish(self) -> FinishResult:
        """
        Assemble the draft and dispatch it to the submission client.

        Only one call may dispatch at a time; a concurrent call gets an
        ``IN_PROGRESS`` result and does nothing. Once the session has been
        submitted, the same result is returned again.

        Returns
        -------
        :class:`.FinishResult`

        Raises
        ------
        :class:`.InvalidTransition`
            If the session is not at CONFIRMATION (or DONE).

        """
        if not self._finishing.acquire(blocking=False):
            logger.debug('Finish already in progress')
            return FinishResult(FinishStatus.IN_PROGRESS,
                                message='Submission is already in progress')
        try:
            if self.step is Step.DONE and self.result is not None:
                return self.result
            if self.step is not Step.CONFIRMATION:
                raise InvalidTransition(self.step, 'finish')
            self.result = self._dispatch()
            return self.result
        finally:
            self._finishing.release()

    def _dispatch(self) -> FinishResult:
        try:
            submission = assemble(self.draft, self.creator)
        except AssemblyFailed as e:
            logger.exception('Could not assemble submission')
            return FinishResult(FinishStatus.FAILED, message=str(e))

        try:
            persisted_id = self.client.submit(submission, token=self.token)
        except ValidationRejected as e:
            logger.warning('Submission %s rejected: %s',
                           submission.submission_id, e.errors)
            outcome = ValidationOutcome()
            for name, message in e.errors.items():
                outcome.add_errors(name, [message])
            self.outcome = outcome
            return FinishResult(FinishStatus.REJECTED, submission=submission,
                                outcome=outcome, message=str(e))
        except TransientFailure as e:
            logger.warning('Submission %s not dispatched: %s',
                           submission.submission_id, e)
            return FinishResult(FinishStatus.RETRYABLE, submission=submission,
                                message=str(e))
        except Fatal as e:
            logger.error('Submission %s failed: %s',
                         submission.submission_id, e)
            self._discard()
            self.step = Step.ABORTED
            return FinishResult(FinishStatus.ABORTED, submission=submission,
                                message=str(e))
        except SubmitError as e:
            logger.warning('Submission %s not dispatched: %s',
                           submission.submission_id, e)
            return FinishResult(FinishStatus.RETRYABLE, submission=submission,
                                message=str(e))
        except Exception as e:
            logger.exception('Unexpected error dispatching submission %s',
                             submission.submission_id)
            return FinishResult(FinishStatus.FAILED, submission=submission,
                                message=str(e))

        logger.debug('Submission %s persisted as %s',
                     submission.submission_id, persisted_id)
        self.outcome = None
        self.step = Step.DONE
        return FinishResult(FinishStatus.SUBMITTED, submission=submission,
                            persisted_id=persisted_id)

    def _check_idle(self, operation: str) -> None:
        if self._finishing.locked():
            raise InvalidTransition(self.step, operation)

    def _discard(self) -> None:
        self.draft = None
        self.attachments = None
        self.outcome = None

    # --- START ---

    @during(Step.START)
    def check_item(self, item: ChecklistItem, value: bool = True) -> None:
        """Set or unset a checklist attestation."""
        self.draft.check(item, value)

    @during(Step.START)
    def agree_to_copyright(self, value: bool = True) -> None:
        """Acknowledge the copyright notice."""
        self.draft.agree_to_copyright(value)

    @during(Step.START)
    def set_comments(self, comments: str) -> None:
        """Set comments for the editor."""
        self.draft.set_comments(comments)

    # --- UPLOAD ---

    @during(Step.UPLOAD)
    def attach_primary(self, upload: UploadedFile) -> ValidationOutcome:
        """
        Attach the manuscript file, replacing any that was attached before.

        Returns
        -------
        :class:`.ValidationOutcome`
            With a single ``file`` error if the upload was rejected.

        """
        outcome = ValidationOutcome()
        outcome.add_errors('file', self.attachments.attach_primary(upload))
        return outcome

    # --- METADATA ---

    @during(Step.METADATA)
    def add_author(self, **values: Any) -> Author:
        """Add an author; the first author is the principal contact."""
        return self.draft.authors.add(**values)

    @during(Step.METADATA)
    def update_author(self, author_id: int, **values: Any) -> Author:
        """Change the details of an author."""
        return self.draft.authors.update(author_id, **values)

    @during(Step.METADATA)
    def delete_author(self, author_id: int) -> None:
        """Remove an author, unless they are the only one."""
        self.draft.authors.delete(author_id)

    @during(Step.METADATA)
    def set_principal(self, author_id: int) -> None:
        """Make an author the (only) principal contact."""
        self.draft.authors.set_principal(author_id)

    @during(Step.METADATA)
    def update_metadata(self, **values: Any) -> None:
        """Set title, abstract, keywords, language, agencies or references."""
        self.draft.update_metadata(**values)

    # --- SUPPLEMENTARY ---

    @during(Step.SUPPLEMENTARY)
    def attach_supplementary(self, upload: UploadedFile) -> FileRef:
        """Attach a supplementary file."""
        return self.attachments.attach_supplementary(upload)

    @during(Step.SUPPLEMENTARY)
    def remove_supplementary(self, file_id: str) -> None:
        """Remove a supplementary file."""
        self.attachments.remove_supplementary(file_id)
