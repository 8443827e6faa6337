"""Convert a finished draft into an immutable :class:`.Submission`."""

import logging

from .domain.agent import Agent
from .domain.draft import SubmissionDraft
from .domain.submission import Submission
from .domain.util import get_tzaware_utc_now, make_identifier, split_list, \
    split_paragraphs, tidy
from .exceptions import AssemblyFailed

logger = logging.getLogger(__name__)


def assemble(draft: SubmissionDraft, creator: Agent) -> Submission:
    """
    Project a draft into a :class:`.Submission`.

    Keywords and agencies are split on semicolons, and references on blank
    lines; each item is trimmed and empty items are dropped. Authors and files
    are carried over as they are. The draft itself is not modified.

    Parameters
    ----------
    draft : :class:`.SubmissionDraft`
    creator : :class:`.Agent`
        The party on whose behalf the submission is made.

    Returns
    -------
    :class:`.Submission`

    Raises
    ------
    :class:`.AssemblyFailed`
        If the draft is not in a state that the step gates should have
        allowed to reach confirmation. Nothing is produced in that case.

    """
    authors = tuple(draft.authors)
    if not authors:
        raise AssemblyFailed('Draft has no authors')
    principals = [author for author in authors if author.is_principal]
    if len(principals) != 1:
        raise AssemblyFailed(f'Draft has {len(principals)} principal contacts')
    if draft.primary_file is None:
        raise AssemblyFailed('Draft has no primary file')
    if not draft.copyright_agreed:
        raise AssemblyFailed('Copyright notice was not acknowledged')

    created = get_tzaware_utc_now()
    submission_id = make_identifier(created.isoformat(),
                                    creator.agent_identifier)
    submission = Submission(
        submission_id=submission_id,
        created=created,
        creator=creator,
        checklist=tuple(item for item, checked in draft.checklist.items()
                        if checked),
        copyright_agreed=draft.copyright_agreed,
        comments=draft.comments.strip(),
        authors=authors,
        title=tidy(draft.title),
        abstract=draft.abstract.strip(),
        keywords=tuple(split_list(draft.keywords)),
        language=draft.language,
        agencies=tuple(split_list(draft.agencies)),
        references=tuple(split_paragraphs(draft.references)),
        primary_file=draft.primary_file,
        supplementary_files=tuple(draft.supplementary_files)
    )
    logger.debug('Assembled submission %s', submission_id)
    return submission
