"""
Validation rules for each facet of a submission.

Every function here is pure: it looks only at its argument and returns a list
of human-readable violations, which is empty when the input is acceptable.
The same input always produces the same list, in the same order.
"""

import re
from typing import Any, Dict, Iterable, List, Mapping, Optional

from .author import Author
from .draft import ChecklistItem
from .files import MANUSCRIPT_TYPES, MAX_MANUSCRIPT_SIZE
from .util import count_words, is_blank

TITLE_MAX_WORDS = 20
ABSTRACT_MAX_WORDS = 300

EMAIL = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')


def validate_title(title: str) -> List[str]:
    """Title is required, and may be at most :const:`TITLE_MAX_WORDS` long."""
    if is_blank(title):
        return ['Title is required']
    n = count_words(title)
    if n > TITLE_MAX_WORDS:
        return [f'Title exceeds {TITLE_MAX_WORDS} words (current: {n} words)']
    return []


def validate_abstract(abstract: str) -> List[str]:
    """Abstract is required; there is a maximum length but no minimum."""
    if is_blank(abstract):
        return ['Abstract is required']
    n = count_words(abstract)
    if n > ABSTRACT_MAX_WORDS:
        return [f'Abstract cannot exceed {ABSTRACT_MAX_WORDS} words'
                f' (current: {n} words)']
    return []


def validate_authors(authors: Iterable[Author]) -> List[str]:
    """
    Check the author list.

    Parameters
    ----------
    authors : iterable of :class:`.Author`

    Returns
    -------
    list
        One message if there are no authors at all. Otherwise, up to two
        messages per author (numbered from 1, in list order), followed by a
        message if no author is the principal contact.

    """
    authors = list(authors)
    if not authors:
        return ['At least one author is required']
    errors = []
    for i, author in enumerate(authors, 1):
        if is_blank(author.first_name) or is_blank(author.last_name) \
                or is_blank(author.email):
            errors.append(f'Author {i} must have first name, last name,'
                          ' and email')
        if not is_blank(author.email) and not EMAIL.match(author.email):
            errors.append(f'Author {i} has invalid email format')
    if not any(author.is_principal for author in authors):
        errors.append('Principal contact must be designated')
    return errors


def validate_references(references: str) -> List[str]:
    """References are not currently constrained."""
    return []


def validate_file(file: Optional[Any]) -> List[str]:
    """
    Check a primary manuscript file.

    Parameters
    ----------
    file : :class:`.FileRef` or :class:`.UploadedFile` or None
        Anything with ``mime_type`` and ``size_bytes`` attributes. ``None``
        means that no file has been provided.

    Returns
    -------
    list
        If the file is missing, only that is reported. Otherwise there may be
        a message about the format, and/or a message about the size.

    """
    if file is None:
        return ['Manuscript file is required']
    errors = []
    if file.mime_type not in MANUSCRIPT_TYPES:
        errors.append('File must be in DOC, DOCX, PDF, or RTF format')
    if file.size_bytes > MAX_MANUSCRIPT_SIZE:
        size_mb = file.size_bytes / (1024 * 1024)
        errors.append(f'File size must not exceed 20MB'
                      f' (current: {size_mb:.2f}MB)')
    return errors


def validate_checklist(checklist: Mapping[ChecklistItem, bool]) -> List[str]:
    """One message per required attestation that has not been made."""
    return [f'Required checklist item not confirmed: {item.name_text}'
            for item in ChecklistItem if not checklist.get(item, False)]


def validate_copyright(agreed: bool) -> List[str]:
    """The copyright notice must be acknowledged."""
    if not agreed:
        return ['Copyright notice must be acknowledged']
    return []


def get_requirements() -> Dict[str, Any]:
    """Describe the limits enforced by the validators in this module."""
    return {
        'title': {'required': True, 'max_words': TITLE_MAX_WORDS},
        'abstract': {'required': True, 'max_words': ABSTRACT_MAX_WORDS},
        'authors': {'min': 1, 'required_fields': ['first_name', 'last_name',
                                                  'email'],
                    'principal_contact': True},
        'file': {'required': True,
                 'mime_types': list(MANUSCRIPT_TYPES),
                 'max_size_bytes': MAX_MANUSCRIPT_SIZE},
        'checklist': [item.value for item in ChecklistItem],
        'copyright': {'required': True},
    }
