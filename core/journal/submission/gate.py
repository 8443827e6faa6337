"""
Decide whether the wizard may leave a step.

Each active step has a gate that looks at the draft and produces a
:class:`.ValidationOutcome`. The wizard may move forward only when the
outcome has no errors; warnings are informational.
"""

from typing import Callable, Dict

from .domain.draft import SubmissionDraft
from .domain.outcome import ValidationOutcome
from .domain.step import Step, ACTIVE_STEPS
from .domain.util import is_blank
from .domain.validators import validate_checklist, validate_copyright, \
    validate_file, validate_title, validate_abstract, validate_authors, \
    validate_references

NO_KEYWORDS = 'No keywords provided; adding keywords helps readers find your' \
    ' work'


def _check_start(draft: SubmissionDraft, outcome: ValidationOutcome) -> None:
    outcome.add_errors('checklist', validate_checklist(draft.checklist))
    outcome.add_errors('copyright', validate_copyright(draft.copyright_agreed))


def _check_upload(draft: SubmissionDraft, outcome: ValidationOutcome) -> None:
    outcome.add_errors('file', validate_file(draft.primary_file))


def _check_metadata(draft: SubmissionDraft,
                    outcome: ValidationOutcome) -> None:
    outcome.add_errors('title', validate_title(draft.title))
    outcome.add_errors('abstract', validate_abstract(draft.abstract))
    outcome.add_errors('authors', validate_authors(draft.authors))
    outcome.add_errors('references', validate_references(draft.references))
    if is_blank(draft.keywords):
        outcome.warnings.append(NO_KEYWORDS)


def _no_checks(draft: SubmissionDraft, outcome: ValidationOutcome) -> None:
    pass


GATES: Dict[Step, Callable[[SubmissionDraft, ValidationOutcome], None]] = {
    Step.START: _check_start,
    Step.UPLOAD: _check_upload,
    Step.METADATA: _check_metadata,
    Step.SUPPLEMENTARY: _no_checks,
    Step.CONFIRMATION: _no_checks,
}


def evaluate(step: Step, draft: SubmissionDraft) -> ValidationOutcome:
    """
    Evaluate the gate for ``step``.

    Parameters
    ----------
    step : :class:`.Step`
        Must be one of the active steps.
    draft : :class:`.SubmissionDraft`
        Not modified.

    Returns
    -------
    :class:`.ValidationOutcome`
        A new outcome on every call.

    Raises
    ------
    ValueError
        If ``step`` is terminal.

    """
    if step not in GATES:
        raise ValueError(f'No gate for {step}')
    outcome = ValidationOutcome()
    GATES[step](draft, outcome)
    return outcome


def review(draft: SubmissionDraft) -> ValidationOutcome:
    """Evaluate every gate at once, e.g. to check a draft before finishing."""
    outcome = ValidationOutcome()
    for step in ACTIVE_STEPS:
        outcome.update(evaluate(step, draft))
    return outcome
