"""Tests for :mod:`journal.submission.services.manuscripts`."""

import io
import json
from unittest import TestCase, mock

import requests
from flask import Flask

from .. import manuscripts
from ...assembler import assemble
from ...attachments import AttachmentRegistry
from ...domain.agent import User
from ...domain.files import UploadedFile
from ...domain.step import Step
from ...exceptions import ValidationRejected, TransientFailure, Fatal
from ...sequencer import StepSequencer, FinishStatus
from ...tests.util import complete_draft, upload, to_confirmation


def raise_connection_failure(*args, **kwargs):
    raise requests.exceptions.ConnectionError('Whoops!')


def mock_response(status_code, data=None):
    """Make a response that returns ``data`` as JSON."""
    response = mock.MagicMock(status_code=status_code, content=b'')
    if data is None:
        response.json.side_effect = ValueError('No JSON')
    else:
        response.json.return_value = data
    return response


class TestSubmit(TestCase):
    """Dispatch a submission to the manuscript API."""

    def setUp(self):
        """Assemble a submission with a supplementary file."""
        draft = complete_draft()
        registry = AttachmentRegistry(draft)
        registry.attach_primary(upload())
        registry.attach_supplementary(
            UploadedFile('data.csv', 'text/csv', 3, io.BytesIO(b'a,b'))
        )
        self.submission = assemble(draft, User('1234'))

    def service(self):
        """Create a service that does not wait between attempts."""
        return manuscripts.ManuscriptService('http://foo.bar/api/', tries=2,
                                             delay=0)

    @mock.patch(f'{manuscripts.__name__}.requests.Session')
    def test_created(self, mock_session):
        """The identifier of the new manuscript is returned."""
        mock_post = mock.MagicMock(return_value=mock_response(201,
                                                              {'id': 42}))
        mock_session.return_value = mock.MagicMock(post=mock_post)

        persisted_id = self.service().submit(self.submission, token='tok')

        self.assertEqual(persisted_id, '42')
        args, kwargs = mock_post.call_args
        self.assertEqual(args[0], 'http://foo.bar/api/manuscripts')
        self.assertEqual(kwargs['headers']['Authorization'], 'Bearer tok')
        names = [name for name, _ in kwargs['files']]
        self.assertEqual(names, ['manuscriptFile', 'supplementaryFile_0'])
        data = json.loads(kwargs['data']['data'])
        self.assertEqual(data['submission_id'],
                         self.submission.submission_id)
        self.assertEqual(data['title'], 'A study of things')

    @mock.patch(f'{manuscripts.__name__}.requests.Session')
    def test_rejected(self, mock_session):
        """Field errors from the API are passed on."""
        errors = {'errors': [
            {'field': 'title', 'message': 'Title is required'},
            {'field': 'title', 'message': 'Title is too vague'},
            {'field': 'abstract', 'message': 'Abstract is required'},
        ]}
        mock_post = mock.MagicMock(return_value=mock_response(422, errors))
        mock_session.return_value = mock.MagicMock(post=mock_post)

        with self.assertRaises(ValidationRejected) as ctx:
            self.service().submit(self.submission)
        self.assertEqual(ctx.exception.errors, {
            'title': 'Title is required; Title is too vague',
            'abstract': 'Abstract is required'
        })
        self.assertEqual(mock_post.call_count, 1, "Rejections are not retried")

    @mock.patch(f'{manuscripts.__name__}.requests.Session')
    def test_server_error(self, mock_session):
        """Server errors are retried, then reported as transient."""
        mock_post = mock.MagicMock(return_value=mock_response(503))
        mock_session.return_value = mock.MagicMock(post=mock_post)

        with self.assertRaises(TransientFailure):
            self.service().submit(self.submission)
        self.assertEqual(mock_post.call_count, 2, "Each attempt is made")

    @mock.patch(f'{manuscripts.__name__}.requests.Session')
    def test_recovers(self, mock_session):
        """A later attempt may succeed."""
        mock_post = mock.MagicMock(side_effect=[mock_response(429),
                                                mock_response(200, {'id': 7})])
        mock_session.return_value = mock.MagicMock(post=mock_post)

        self.assertEqual(self.service().submit(self.submission), '7')

    @mock.patch(f'{manuscripts.__name__}.requests.Session')
    def test_connection_failure(self, mock_session):
        """Connection failures are transient."""
        mock_post = mock.MagicMock(side_effect=raise_connection_failure)
        mock_session.return_value = mock.MagicMock(post=mock_post)

        with self.assertRaises(TransientFailure):
            self.service().submit(self.submission)

    @mock.patch(f'{manuscripts.__name__}.requests.Session')
    def test_forbidden(self, mock_session):
        """Other client errors are fatal."""
        mock_post = mock.MagicMock(return_value=mock_response(403))
        mock_session.return_value = mock.MagicMock(post=mock_post)

        with self.assertRaises(Fatal):
            self.service().submit(self.submission)
        self.assertEqual(mock_post.call_count, 1)

    @mock.patch(f'{manuscripts.__name__}.requests.Session')
    def test_missing_id(self, mock_session):
        """A success response without an identifier is fatal."""
        mock_post = mock.MagicMock(return_value=mock_response(200, {}))
        mock_session.return_value = mock.MagicMock(post=mock_post)

        with self.assertRaises(Fatal):
            self.service().submit(self.submission)

    @mock.patch(f'{manuscripts.__name__}.requests.Session')
    def test_broken_response(self, mock_session):
        """Other request failures are transient."""
        mock_post = mock.MagicMock(
            side_effect=requests.exceptions.ChunkedEncodingError('broken')
        )
        mock_session.return_value = mock.MagicMock(post=mock_post)

        with self.assertRaises(TransientFailure):
            self.service().submit(self.submission)
        self.assertEqual(mock_post.call_count, 2, "Each attempt is made")

    @mock.patch(f'{manuscripts.__name__}.requests.Session')
    def test_invalid_url(self, mock_session):
        """A bad endpoint is fatal."""
        mock_post = mock.MagicMock(
            side_effect=requests.exceptions.InvalidURL('bad')
        )
        mock_session.return_value = mock.MagicMock(post=mock_post)

        with self.assertRaises(Fatal):
            self.service().submit(self.submission)
        self.assertEqual(mock_post.call_count, 1)

    @mock.patch(f'{manuscripts.__name__}.requests.Session')
    def test_unreadable_file(self, mock_session):
        """Content that cannot be read from the store is fatal."""
        mock_post = mock.MagicMock(return_value=mock_response(201,
                                                              {'id': 1}))
        mock_session.return_value = mock.MagicMock(post=mock_post)
        store = mock.MagicMock()
        store.open.side_effect = FileNotFoundError('gone')
        service = manuscripts.ManuscriptService('http://foo.bar/api/',
                                                tries=2, delay=0, store=store)

        with self.assertRaises(Fatal):
            service.submit(self.submission)
        self.assertEqual(mock_post.call_count, 0)


class TestFinishWithService(TestCase):
    """Failures of the real service are reported by the session."""

    @mock.patch(f'{manuscripts.__name__}.requests.Session')
    def test_broken_response(self, mock_session):
        """A broken response leaves the session at confirmation."""
        mock_post = mock.MagicMock(
            side_effect=requests.exceptions.ChunkedEncodingError('broken')
        )
        mock_session.return_value = mock.MagicMock(post=mock_post)
        service = manuscripts.ManuscriptService('http://foo.bar/api/',
                                                tries=1, delay=0)
        session = StepSequencer(User('1234'), service)
        to_confirmation(session)

        result = session.finish()
        self.assertEqual(result.status, FinishStatus.RETRYABLE)
        self.assertEqual(session.step, Step.CONFIRMATION)
        self.assertIsNotNone(session.draft)

    @mock.patch(f'{manuscripts.__name__}.requests.Session')
    def test_too_many_redirects(self, mock_session):
        """A redirect loop aborts the session."""
        mock_post = mock.MagicMock(
            side_effect=requests.exceptions.TooManyRedirects('loop')
        )
        mock_session.return_value = mock.MagicMock(post=mock_post)
        service = manuscripts.ManuscriptService('http://foo.bar/api/',
                                                tries=1, delay=0)
        session = StepSequencer(User('1234'), service)
        to_confirmation(session)

        result = session.finish()
        self.assertEqual(result.status, FinishStatus.ABORTED)
        self.assertEqual(session.step, Step.ABORTED)


class TestSession(TestCase):
    """Get a service configured for the application."""

    def test_app_config(self):
        """The application config is used within an application context."""
        app = Flask('test')
        app.config['MANUSCRIPTS_ENDPOINT'] = 'http://manuscripts/api/'
        app.config['MANUSCRIPTS_SUBMIT_TRIES'] = 5
        manuscripts.init_app(app)
        with app.app_context():
            service = manuscripts.current_session()
            self.assertIs(manuscripts.current_session(), service,
                          "The same session is used within a context")
        self.assertEqual(service.endpoint, 'http://manuscripts/api/')
        self.assertEqual(service.tries, 5)
        self.assertEqual(service.delay, 1.)

    @mock.patch.dict('os.environ', {'MANUSCRIPTS_VERIFY': '0'})
    def test_environ(self):
        """The environment is used outside of an application context."""
        service = manuscripts.current_session()
        self.assertFalse(service.verify)

    @mock.patch(f'{manuscripts.__name__}.requests.Session')
    def test_submit_with_current_session(self, mock_session):
        """The module-level function uses the session for the context."""
        mock_post = mock.MagicMock(return_value=mock_response(201, {'id': 9}))
        mock_session.return_value = mock.MagicMock(post=mock_post)
        app = Flask('test')
        app.config['MANUSCRIPTS_SUBMIT_DELAY'] = 0
        manuscripts.init_app(app)
        draft = complete_draft()
        AttachmentRegistry(draft).attach_primary(upload())
        with app.app_context():
            persisted_id = manuscripts.submit(assemble(draft, User('1234')))
        self.assertEqual(persisted_id, '9')
