"""Steps of the submission wizard."""

from enum import Enum
from typing import Optional


class Step(Enum):
    """
    A state of the submission wizard.

    The five active steps are visited in order. ``DONE``, ``CANCELLED`` and
    ``ABORTED`` are terminal: nothing further can happen in a session that
    has reached one of them.
    """

    START = 'start'
    UPLOAD = 'upload'
    METADATA = 'metadata'
    SUPPLEMENTARY = 'supplementary'
    CONFIRMATION = 'confirmation'
    DONE = 'done'
    CANCELLED = 'cancelled'
    ABORTED = 'aborted'

    @property
    def is_terminal(self) -> bool:
        return self in (Step.DONE, Step.CANCELLED, Step.ABORTED)

    @property
    def number(self) -> Optional[int]:
        """Position of an active step, counting from 1."""
        if self.is_terminal:
            return None
        return ACTIVE_STEPS.index(self) + 1

    @property
    def title(self) -> str:
        return _TITLES[self][0]

    @property
    def description(self) -> str:
        return _TITLES[self][1]

    @property
    def next(self) -> Optional['Step']:
        """The following active step, if there is one."""
        if self.is_terminal or self is Step.CONFIRMATION:
            return None
        return ACTIVE_STEPS[ACTIVE_STEPS.index(self) + 1]

    @property
    def previous(self) -> Optional['Step']:
        """The preceding active step, if there is one."""
        if self.is_terminal or self is Step.START:
            return None
        return ACTIVE_STEPS[ACTIVE_STEPS.index(self) - 1]


ACTIVE_STEPS = (Step.START, Step.UPLOAD, Step.METADATA, Step.SUPPLEMENTARY,
                Step.CONFIRMATION)

_TITLES = {
    Step.START: ('Start', 'Begin your submission process'),
    Step.UPLOAD: ('Upload Submission', 'Upload your manuscript and files'),
    Step.METADATA: ('Enter Metadata', 'Add title, abstract, and keywords'),
    Step.SUPPLEMENTARY: ('Upload Supplementary Files',
                         'Add additional supporting documents'),
    Step.CONFIRMATION: ('Confirmation', 'Review and submit your manuscript'),
    Step.DONE: ('Submitted', 'Your manuscript has been submitted'),
    Step.CANCELLED: ('Cancelled', 'The submission was cancelled'),
    Step.ABORTED: ('Aborted', 'The submission could not be completed'),
}
