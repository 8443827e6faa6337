"""External services and the interfaces the workflow expects of them."""

from .base import SubmissionClient, FileStore
from .filestore import LocalFileStore
from .manuscripts import ManuscriptService
