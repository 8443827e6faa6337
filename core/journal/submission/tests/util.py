"""Helpers for building drafts and sessions in tests."""

import io

from mimesis import Person, Text

from ..domain.draft import ChecklistItem, SubmissionDraft
from ..domain.files import UploadedFile, PDF
from ..sequencer import StepSequencer


def upload(name: str = 'manuscript.pdf', mime_type: str = PDF,
           size_bytes: int = 1024) -> UploadedFile:
    """Describe an uploaded file with some content."""
    return UploadedFile(name, mime_type, size_bytes,
                        io.BytesIO(b'%PDF-1.4 not really'))


def fill_start(session: StepSequencer) -> None:
    """Complete the checklist and acknowledge the copyright notice."""
    for item in ChecklistItem:
        session.check_item(item)
    session.agree_to_copyright()


def fill_metadata(session: StepSequencer) -> None:
    """Add an author and the required metadata."""
    person = Person()
    session.add_author(first_name=person.first_name(),
                       last_name=person.last_name(),
                       email='author@example.org')
    session.update_metadata(title='A study of things',
                            abstract=Text().sentence(),
                            keywords='things; stuff')


def to_confirmation(session: StepSequencer) -> None:
    """Move a new session through every step to confirmation."""
    fill_start(session)
    session.advance()
    session.attach_primary(upload())
    session.advance()
    fill_metadata(session)
    session.advance()
    session.advance()


def complete_draft() -> SubmissionDraft:
    """Build a draft that would pass every step gate."""
    draft = SubmissionDraft()
    for item in ChecklistItem:
        draft.check(item)
    draft.agree_to_copyright()
    draft.authors.add(first_name='Ada', last_name='Lovelace',
                      email='ada@example.org')
    draft.update_metadata(title='A study of things',
                          abstract='We studied things.')
    return draft
