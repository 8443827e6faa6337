"""
Integration with the manuscript persistence API.

Finished submissions are posted as multipart form data: the primary file as
``manuscriptFile``, each supplementary file as ``supplementaryFile_<i>``, and
everything else as JSON in the ``data`` field.
"""

import json
import logging
from contextlib import ExitStack
from functools import wraps
from http import HTTPStatus
from typing import Any, Dict, IO, List, Optional, Tuple
from urllib.parse import urljoin

import requests
from requests.adapters import HTTPAdapter
from retry.api import retry_call
from urllib3.util.retry import Retry

from ..context import get_application_config, get_application_global
from ..domain.files import FileRef
from ..domain.submission import Submission
from ..exceptions import ValidationRejected, TransientFailure, Fatal
from .base import FileStore

logger = logging.getLogger(__name__)

TRANSIENT_STATUSES = (
    HTTPStatus.REQUEST_TIMEOUT,
    HTTPStatus.TOO_MANY_REQUESTS,
)
REJECTED_STATUSES = (
    HTTPStatus.BAD_REQUEST,
    HTTPStatus.UNPROCESSABLE_ENTITY,
)
ACCEPTED_STATUSES = (
    HTTPStatus.OK,
    HTTPStatus.CREATED,
)


class ManuscriptService:
    """Dispatches :class:`.Submission` records to the manuscript API."""

    def __init__(self, endpoint: str, verify: bool = True,
                 timeout: float = 30., tries: int = 3, delay: float = 1.,
                 store: Optional[FileStore] = None) -> None:
        """Create a new HTTP session."""
        self.endpoint = endpoint
        self.verify = verify
        self.timeout = timeout
        self.tries = tries
        self.delay = delay
        self.store = store
        self._session = requests.Session()
        self._retry = Retry(
            total=3,
            read=3,
            connect=3,
            status=0,
            backoff_factor=0.5
        )
        self._adapter = HTTPAdapter(max_retries=self._retry)
        self._session.mount('http://', self._adapter)
        self._session.mount('https://', self._adapter)

    def submit(self, submission: Submission,
               token: Optional[str] = None) -> str:
        """
        Persist a submission, retrying after transient failures.

        Parameters
        ----------
        submission : :class:`.Submission`
        token : str
            Bearer token for the submitter, if they are authenticated.

        Returns
        -------
        str
            Identifier assigned to the manuscript by the API.

        Raises
        ------
        :class:`.ValidationRejected`
        :class:`.TransientFailure`
            Raised once all attempts have failed.
        :class:`.Fatal`

        """
        return retry_call(self._submit, fargs=[submission, token],
                          exceptions=TransientFailure, tries=self.tries,
                          delay=self.delay, logger=logger)

    def _submit(self, submission: Submission, token: Optional[str]) -> str:
        logger.debug('Dispatch submission %s', submission.submission_id)
        headers = {}
        if token:
            headers['Authorization'] = f'Bearer {token}'
        with ExitStack() as stack:
            files = self._files(submission, stack)
            try:
                response = self._session.post(
                    urljoin(self.endpoint, 'manuscripts'),
                    data={'data': json.dumps(submission.to_dict())},
                    files=files,
                    headers=headers,
                    timeout=self.timeout,
                    verify=self.verify
                )
            except (requests.exceptions.ConnectionError,
                    requests.exceptions.Timeout) as e:
                raise TransientFailure(
                    f'Could not connect to manuscript service: {e}'
                ) from e
            except (requests.exceptions.InvalidURL,
                    requests.exceptions.MissingSchema,
                    requests.exceptions.InvalidSchema,
                    requests.exceptions.TooManyRedirects) as e:
                raise Fatal(f'Cannot reach manuscript service: {e}') from e
            except requests.exceptions.RequestException as e:
                raise TransientFailure(
                    f'Request to manuscript service failed: {e}'
                ) from e
        return self._handle(response)

    def _files(self, submission: Submission, stack: ExitStack) \
            -> List[Tuple[str, Tuple[str, IO[bytes], str]]]:
        files = []
        if submission.primary_file is not None:
            files.append(('manuscriptFile',
                          self._part(submission.primary_file, stack)))
        for i, ref in enumerate(submission.supplementary_files):
            files.append((f'supplementaryFile_{i}', self._part(ref, stack)))
        return files

    def _part(self, ref: FileRef, stack: ExitStack) \
            -> Tuple[str, IO[bytes], str]:
        """Get the multipart tuple for a file; may be sent more than once."""
        if self.store is not None:
            try:
                content = stack.enter_context(self.store.open(ref.handle))
            except OSError as e:
                raise Fatal(f'Cannot read {ref.original_file_name}: {e}') \
                    from e
        elif hasattr(ref.handle, 'read'):
            content = ref.handle
            if hasattr(content, 'seek'):
                content.seek(0)
        else:
            raise Fatal(f'No content available for {ref.original_file_name}')
        return (ref.original_file_name, content, ref.mime_type)

    @staticmethod
    def _handle(response: requests.Response) -> str:
        logger.debug('Handle response: %i', response.status_code)
        status = response.status_code
        if status in ACCEPTED_STATUSES:
            try:
                return str(response.json()['id'])
            except (ValueError, KeyError, TypeError) as e:
                raise Fatal(f'Unexpected response content: {e}') from e
        if status in REJECTED_STATUSES:
            raise ValidationRejected(_parse_errors(response))
        if status in TRANSIENT_STATUSES or status >= 500:
            raise TransientFailure(f'Manuscript service responded {status}')
        raise Fatal(f'Manuscript service responded {status}:'
                    f' {response.content!r}')


def _parse_errors(response: requests.Response) -> Dict[str, str]:
    """Collect ``{field, message}`` pairs from an error response."""
    try:
        data = response.json()
    except ValueError:
        logger.debug('Failed to parse error response')
        return {}
    errors: Dict[str, str] = {}
    for error in data.get('errors', []) if isinstance(data, dict) else []:
        name = error.get('field', 'submission')
        message = error.get('message', '')
        if name in errors:
            errors[name] = f'{errors[name]}; {message}'
        else:
            errors[name] = message
    return errors


def init_app(app: Optional[Any] = None) -> None:
    """
    Set required configuration defaults for the application.

    Parameters
    ----------
    app : :class:`flask.Flask`
    """
    if app is not None:
        app.config.setdefault('MANUSCRIPTS_ENDPOINT',
                              'http://localhost:8000/api/')
        app.config.setdefault('MANUSCRIPTS_VERIFY', True)
        app.config.setdefault('MANUSCRIPTS_TIMEOUT', 30.)
        app.config.setdefault('MANUSCRIPTS_SUBMIT_TRIES', 3)
        app.config.setdefault('MANUSCRIPTS_SUBMIT_DELAY', 1.)


def get_session(app: Optional[Any] = None,
                store: Optional[FileStore] = None) -> ManuscriptService:
    """
    Create a new :class:`.ManuscriptService` session.

    Parameters
    ----------
    app : :class:`flask.Flask`
    store : :class:`.FileStore`
        Where uploaded file content is kept, if not on the file references.

    Return
    ------
    :class:`.ManuscriptService`
    """
    config = get_application_config(app)
    return ManuscriptService(
        config.get('MANUSCRIPTS_ENDPOINT', 'http://localhost:8000/api/'),
        verify=_as_bool(config.get('MANUSCRIPTS_VERIFY', True)),
        timeout=float(config.get('MANUSCRIPTS_TIMEOUT', 30.)),
        tries=int(config.get('MANUSCRIPTS_SUBMIT_TRIES', 3)),
        delay=float(config.get('MANUSCRIPTS_SUBMIT_DELAY', 1.)),
        store=store
    )


def current_session(app: Optional[Any] = None) -> ManuscriptService:
    """
    Get the current :class:`.ManuscriptService` for this context.

    Parameters
    ----------
    app : :class:`flask.Flask`

    Return
    ------
    :class:`.ManuscriptService`

    """
    g = get_application_global()
    if g:
        if 'manuscripts' not in g:
            g.manuscripts = get_session(app)  # type: ignore
        return g.manuscripts  # type: ignore
    return get_session(app)


@wraps(ManuscriptService.submit)
def submit(submission: Submission, token: Optional[str] = None) -> str:
    """Persist a submission using the current session."""
    return current_session().submit(submission, token=token)


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() not in ('0', 'false', 'no', '')
    return bool(value)
