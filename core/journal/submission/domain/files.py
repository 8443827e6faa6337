"""Files attached to a submission."""

import os
from datetime import datetime
from typing import Any, IO, NamedTuple, Optional

from dataclasses import dataclass, field
from werkzeug.datastructures import FileStorage

from .util import get_tzaware_utc_now

PDF = 'application/pdf'
DOC = 'application/msword'
DOCX = ('application/vnd.openxmlformats-officedocument'
        '.wordprocessingml.document')
RTF = 'application/rtf'
TEXT_RTF = 'text/rtf'

MANUSCRIPT_TYPES = (PDF, DOC, DOCX, RTF, TEXT_RTF)
"""MIME types accepted for the primary manuscript file."""

MAX_MANUSCRIPT_SIZE = 20 * 1024 * 1024
"""Largest primary manuscript file accepted, in bytes."""


@dataclass(frozen=True)
class FileRef:
    """A file that has been attached to a draft."""

    file_id: str
    original_file_name: str
    mime_type: str
    size_bytes: int
    uploaded_at: datetime = field(default_factory=get_tzaware_utc_now)

    handle: Any = field(default=None, compare=False, repr=False)
    """Opaque reference to the content, e.g. a key in a :class:`.FileStore`."""


class UploadedFile(NamedTuple):
    """A file offered for attachment, before it is accepted."""

    name: str
    mime_type: str
    size_bytes: int
    stream: Optional[IO[bytes]] = None

    @classmethod
    def from_storage(cls, storage: FileStorage) -> 'UploadedFile':
        """Describe a file uploaded to a Flask/werkzeug request."""
        stream = storage.stream
        stream.seek(0, os.SEEK_END)
        size = stream.tell()
        stream.seek(0)
        return cls(name=storage.filename or '',
                   mime_type=storage.mimetype or '',
                   size_bytes=size,
                   stream=stream)
