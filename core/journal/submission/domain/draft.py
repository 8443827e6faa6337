"""The in-progress submission that a wizard session builds up."""

from enum import Enum
from typing import Any, Dict, List, Optional

from dataclasses import dataclass, field

from .author import AuthorList
from .files import FileRef


class ChecklistItem(Enum):
    """Attestations the submitter must make before uploading anything."""

    ORIGINALITY = 'originality'
    FILE_FORMAT = 'file-format'
    REFERENCE_IDENTIFIERS = 'references-have-identifiers'
    FORMATTING = 'formatting'
    GUIDELINE_COMPLIANCE = 'guideline-compliance'
    BLIND_REVIEW_READINESS = 'blind-review-readiness'

    @property
    def name_text(self) -> str:
        """Short name of the attestation, as used in messages."""
        return self.value.replace('-', ' ')

    @property
    def label(self) -> str:
        """Human-readable description of the attestation."""
        return _CHECKLIST_LABELS[self]


_CHECKLIST_LABELS = {
    ChecklistItem.ORIGINALITY:
        'The manuscript is original, has not been published elsewhere, and'
        ' is not under consideration by any other journal.',
    ChecklistItem.FILE_FORMAT:
        'The submission file is prepared in Microsoft Word, OpenOffice, or'
        ' PDF format.',
    ChecklistItem.REFERENCE_IDENTIFIERS:
        'All references include valid DOIs or URLs (where available).',
    ChecklistItem.FORMATTING:
        'The text is double-spaced, uses a 12-point font, and includes'
        ' figures and tables within the text at appropriate locations.',
    ChecklistItem.GUIDELINE_COMPLIANCE:
        'The manuscript follows the formatting and citation style in the'
        ' author guidelines.',
    ChecklistItem.BLIND_REVIEW_READINESS:
        'The instructions for ensuring a blind review have been followed.',
}


class Language(Enum):
    """Languages in which a manuscript may be submitted."""

    ENGLISH = 'en'
    FRENCH = 'fr'
    SPANISH = 'es'
    GERMAN = 'de'
    CHINESE = 'zh'


METADATA_FIELDS = ('title', 'abstract', 'keywords', 'language', 'agencies',
                   'references')
"""Draft fields that may be changed with :meth:`.update_metadata`."""


def _empty_checklist() -> Dict[ChecklistItem, bool]:
    return {item: False for item in ChecklistItem}


@dataclass
class SubmissionDraft:
    """
    Everything entered so far in a wizard session.

    Values are raw user input; splitting keywords, trimming whitespace and so
    on happens when the draft is assembled into a :class:`.Submission`.
    """

    checklist: Dict[ChecklistItem, bool] = field(
        default_factory=_empty_checklist
    )
    copyright_agreed: bool = False
    comments: str = field(default_factory=str)

    authors: AuthorList = field(default_factory=AuthorList)

    title: str = field(default_factory=str)
    abstract: str = field(default_factory=str)
    keywords: str = field(default_factory=str)
    """Semicolon-delimited."""
    language: Language = Language.ENGLISH
    agencies: str = field(default_factory=str)
    """Semicolon-delimited."""
    references: str = field(default_factory=str)
    """One reference per paragraph, separated by blank lines."""

    primary_file: Optional[FileRef] = None
    supplementary_files: List[FileRef] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Make sure that we have an enum for the language."""
        if not isinstance(self.language, Language):
            self.language = Language(self.language)

    def check(self, item: ChecklistItem, value: bool = True) -> None:
        """Set or unset a checklist attestation."""
        self.checklist[ChecklistItem(item)] = bool(value)

    def agree_to_copyright(self, value: bool = True) -> None:
        """Acknowledge (or withdraw acknowledgement of) the copyright notice."""
        self.copyright_agreed = bool(value)

    def set_comments(self, comments: str) -> None:
        """Set comments for the editor."""
        self.comments = comments

    def update_metadata(self, **values: Any) -> None:
        """
        Set one or more bibliographic metadata fields.

        Parameters
        ----------
        values : kwargs
            Any of :const:`METADATA_FIELDS`.

        Raises
        ------
        ValueError
            If a field that is not in :const:`METADATA_FIELDS` is passed, or
            the language is not supported.

        """
        unknown = set(values) - set(METADATA_FIELDS)
        if unknown:
            raise ValueError(f'Unknown metadata fields: {sorted(unknown)}')
        if 'language' in values:
            values['language'] = Language(values['language'])
        for key, value in values.items():
            setattr(self, key, value)
