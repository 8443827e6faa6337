"""Tests for :mod:`journal.submission.gate`."""

from unittest import TestCase

from .. import gate
from ..domain.draft import SubmissionDraft
from ..domain.files import FileRef
from ..domain.step import Step
from .util import complete_draft


class TestStartGate(TestCase):
    """The checklist and copyright notice must be confirmed."""

    def test_empty_draft(self):
        """There is one error for the checklist, and one for copyright."""
        outcome = gate.evaluate(Step.START, SubmissionDraft())
        self.assertEqual(set(outcome.errors), {'checklist', 'copyright'})
        self.assertFalse(outcome.passed)

    def test_complete(self):
        """A complete checklist with copyright acknowledged passes."""
        self.assertTrue(gate.evaluate(Step.START, complete_draft()).passed)

    def test_pure(self):
        """The draft is not changed, and each outcome is new."""
        draft = SubmissionDraft()
        first = gate.evaluate(Step.START, draft)
        second = gate.evaluate(Step.START, draft)
        self.assertEqual(first, second)
        self.assertIsNot(first, second)
        self.assertFalse(draft.copyright_agreed)


class TestUploadGate(TestCase):
    """A primary file is required."""

    def test_no_file(self):
        """A draft without a primary file does not pass."""
        outcome = gate.evaluate(Step.UPLOAD, SubmissionDraft())
        self.assertEqual(outcome.errors,
                         {'file': 'Manuscript file is required'})

    def test_bad_file(self):
        """The attached file is checked again, not just its presence."""
        draft = SubmissionDraft()
        draft.primary_file = FileRef(file_id='1',
                                     original_file_name='paper.zip',
                                     mime_type='application/zip',
                                     size_bytes=25 * 1024 * 1024)
        outcome = gate.evaluate(Step.UPLOAD, draft)
        self.assertEqual(
            outcome.errors,
            {'file': 'File must be in DOC, DOCX, PDF, or RTF format;'
                     ' File size must not exceed 20MB (current: 25.00MB)'}
        )

    def test_good_file(self):
        """An acceptable attached file passes."""
        draft = SubmissionDraft()
        draft.primary_file = FileRef(file_id='1',
                                     original_file_name='paper.pdf',
                                     mime_type='application/pdf',
                                     size_bytes=1024)
        self.assertTrue(gate.evaluate(Step.UPLOAD, draft).passed)


class TestMetadataGate(TestCase):
    """Title, abstract and authors are checked."""

    def test_empty_draft(self):
        """Each missing field is reported under its own key."""
        outcome = gate.evaluate(Step.METADATA, SubmissionDraft())
        self.assertEqual(set(outcome.errors), {'title', 'abstract', 'authors'})

    def test_complete_without_keywords(self):
        """Missing keywords is a warning, not an error."""
        outcome = gate.evaluate(Step.METADATA, complete_draft())
        self.assertTrue(outcome.passed)
        self.assertEqual(outcome.warnings, [gate.NO_KEYWORDS])

    def test_with_keywords(self):
        """There is no warning if there are keywords."""
        draft = complete_draft()
        draft.update_metadata(keywords='things')
        outcome = gate.evaluate(Step.METADATA, draft)
        self.assertEqual(outcome.warnings, [])

    def test_multiple_author_errors(self):
        """Multiple problems with authors are joined into one message."""
        draft = SubmissionDraft()
        draft.authors.add(first_name='Ada', email='not an email')
        outcome = gate.evaluate(Step.METADATA, draft)
        self.assertEqual(
            outcome.errors['authors'],
            'Author 1 must have first name, last name, and email;'
            ' Author 1 has invalid email format'
        )


class TestOtherGates(TestCase):
    """Supplementary files and confirmation are not gated."""

    def test_always_pass(self):
        """Even an empty draft passes."""
        self.assertTrue(gate.evaluate(Step.SUPPLEMENTARY,
                                      SubmissionDraft()).passed)
        self.assertTrue(gate.evaluate(Step.CONFIRMATION,
                                      SubmissionDraft()).passed)

    def test_terminal_step(self):
        """Terminal steps have no gate."""
        with self.assertRaises(ValueError):
            gate.evaluate(Step.DONE, SubmissionDraft())


class TestReview(TestCase):
    """All gates can be evaluated at once."""

    def test_review_empty(self):
        """Everything that is missing is reported."""
        outcome = gate.review(SubmissionDraft())
        self.assertEqual(set(outcome.errors),
                         {'checklist', 'copyright', 'file', 'title',
                          'abstract', 'authors'})
