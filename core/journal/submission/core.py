"""Entry points for starting wizard sessions and configuring an application."""

import logging
from typing import Any, Optional

from . import config
from .domain.agent import Agent
from .sequencer import StepSequencer
from .services import manuscripts
from .services.base import FileStore, SubmissionClient

logger = logging.getLogger(__name__)


def begin(creator: Agent, client: Optional[SubmissionClient] = None,
          store: Optional[FileStore] = None,
          token: Optional[str] = None) -> StepSequencer:
    """
    Start a new wizard session with an empty draft.

    Parameters
    ----------
    creator : :class:`.Agent`
        The party on whose behalf the submission is being made.
    client : :class:`.SubmissionClient`
        Persists the submission when the session finishes. If not provided,
        the :class:`.ManuscriptService` for the current context is used.
    store : :class:`.FileStore`
        Where to keep uploaded file content. If not provided, uploaded streams
        are kept on the file references until the session finishes.
    token : str
        Bearer token to present when dispatching the submission.

    Returns
    -------
    :class:`.StepSequencer`

    """
    if client is None:
        client = manuscripts.get_session(store=store)
    logger.debug('Begin submission for %s', creator.agent_identifier)
    return StepSequencer(creator, client, store=store, token=token)


def init_app(app: Any) -> None:
    """
    Set configuration defaults for a Flask application.

    Values already set on ``app.config`` are left alone.
    """
    app.config.setdefault('LOGLEVEL', config.LOGLEVEL)
    app.config.setdefault('MANUSCRIPTS_ENDPOINT', config.MANUSCRIPTS_ENDPOINT)
    app.config.setdefault('MANUSCRIPTS_VERIFY', config.MANUSCRIPTS_VERIFY)
    app.config.setdefault('MANUSCRIPTS_TIMEOUT', config.MANUSCRIPTS_TIMEOUT)
    app.config.setdefault('MANUSCRIPTS_SUBMIT_TRIES',
                          config.MANUSCRIPTS_SUBMIT_TRIES)
    app.config.setdefault('MANUSCRIPTS_SUBMIT_DELAY',
                          config.MANUSCRIPTS_SUBMIT_DELAY)
    app.config.setdefault('FILESTORE_ROOT', config.FILESTORE_ROOT)
    manuscripts.init_app(app)
    logging.getLogger('journal.submission').setLevel(app.config['LOGLEVEL'])

