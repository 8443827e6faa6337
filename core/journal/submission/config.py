"""Submission core configuration parameters."""

from os import environ
import warnings

LOGLEVEL = int(environ.get('LOGLEVEL', '20'))
"""
Logging verbosity.

See `https://docs.python.org/3/library/logging.html#levels`_.
"""

# --- MANUSCRIPT SERVICE CONFIGURATION ---

MANUSCRIPTS_ENDPOINT = environ.get('MANUSCRIPTS_ENDPOINT',
                                   'http://localhost:8000/api/')
"""Base URL of the manuscript persistence API."""

MANUSCRIPTS_VERIFY = bool(int(environ.get('MANUSCRIPTS_VERIFY', '1')))
"""Enable/disable SSL certificate verification for the manuscript API."""

if not MANUSCRIPTS_VERIFY:
    warnings.warn('Certificate verification for the manuscript API is'
                  ' disabled; this should not be disabled in production.')

MANUSCRIPTS_TIMEOUT = float(environ.get('MANUSCRIPTS_TIMEOUT', '30'))
"""Seconds to wait for the manuscript API to respond."""

MANUSCRIPTS_SUBMIT_TRIES = int(environ.get('MANUSCRIPTS_SUBMIT_TRIES', '3'))
"""Number of attempts to dispatch a submission after transient failures."""

MANUSCRIPTS_SUBMIT_DELAY = float(environ.get('MANUSCRIPTS_SUBMIT_DELAY', '1'))
"""Seconds between dispatch attempts."""

# --- FILE STORAGE CONFIGURATION ---

FILESTORE_ROOT = environ.get('FILESTORE_ROOT', '/tmp/manuscripts')
"""Directory in which :class:`.LocalFileStore` keeps uploaded content."""
