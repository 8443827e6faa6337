"""The finished, immutable submission record."""

from datetime import datetime
from typing import Any, Dict, Optional, Tuple

from dataclasses import dataclass, field, asdict

from .agent import Agent
from .author import Author
from .draft import ChecklistItem, Language
from .files import FileRef


@dataclass(frozen=True)
class Submission:
    """
    A normalized snapshot of a draft, ready to be dispatched.

    Multi-valued text fields from the draft (keywords, agencies, references)
    are split into tuples here. Nothing in a :class:`.Submission` changes
    after it has been assembled.
    """

    submission_id: str
    created: datetime
    creator: Agent

    checklist: Tuple[ChecklistItem, ...] = field(default_factory=tuple)
    """Attestations that were made."""

    copyright_agreed: bool = False
    comments: str = field(default_factory=str)
    authors: Tuple[Author, ...] = field(default_factory=tuple)
    title: str = field(default_factory=str)
    abstract: str = field(default_factory=str)
    keywords: Tuple[str, ...] = field(default_factory=tuple)
    language: Language = Language.ENGLISH
    agencies: Tuple[str, ...] = field(default_factory=tuple)
    references: Tuple[str, ...] = field(default_factory=tuple)
    primary_file: Optional[FileRef] = None
    supplementary_files: Tuple[FileRef, ...] = field(default_factory=tuple)

    @property
    def principal_contact(self) -> Optional[Author]:
        """The author who receives correspondence."""
        for author in self.authors:
            if author.is_principal:
                return author
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Generate a JSON-friendly representation of the submission."""
        return {
            'submission_id': self.submission_id,
            'created': self.created.isoformat(),
            'creator': asdict(self.creator),
            'checklist': [item.value for item in self.checklist],
            'copyright_agreed': self.copyright_agreed,
            'comments': self.comments,
            'authors': [asdict(author) for author in self.authors],
            'title': self.title,
            'abstract': self.abstract,
            'keywords': list(self.keywords),
            'language': self.language.value,
            'agencies': list(self.agencies),
            'references': list(self.references),
            'primary_file': _file_to_dict(self.primary_file),
            'supplementary_files': [_file_to_dict(f)
                                    for f in self.supplementary_files],
        }


def _file_to_dict(ref: Optional[FileRef]) -> Optional[Dict[str, Any]]:
    if ref is None:
        return None
    return {
        'file_id': ref.file_id,
        'original_file_name': ref.original_file_name,
        'mime_type': ref.mime_type,
        'size_bytes': ref.size_bytes,
        'uploaded_at': ref.uploaded_at.isoformat(),
    }
