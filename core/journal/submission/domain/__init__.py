"""Core data structures for the submission workflow."""

from .agent import User, Client, Agent, agent_factory
from .author import Author, AuthorList
from .draft import SubmissionDraft, ChecklistItem, Language
from .files import FileRef, UploadedFile
from .outcome import ValidationOutcome
from .submission import Submission
