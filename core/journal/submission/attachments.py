"""Attach manuscript and supplementary files to a draft."""

import logging
import uuid
from typing import List, Optional

from .domain.draft import SubmissionDraft
from .domain.files import FileRef, UploadedFile
from .domain.util import get_tzaware_utc_now
from .domain.validators import validate_file
from .services.base import FileStore

logger = logging.getLogger(__name__)

NO_CONTENT = 'File has no content'


class AttachmentRegistry:
    """
    Owns the file slots of a :class:`.SubmissionDraft`.

    There is at most one primary manuscript file, which is validated before it
    is accepted, and any number of supplementary files, which are not.
    """

    def __init__(self, draft: SubmissionDraft,
                 store: Optional[FileStore] = None) -> None:
        """Work on ``draft``, keeping content in ``store`` if provided."""
        self.draft = draft
        self.store = store

    def attach_primary(self, upload: UploadedFile) -> List[str]:
        """
        Attach (or replace) the primary manuscript file.

        Parameters
        ----------
        upload : :class:`.UploadedFile`

        Returns
        -------
        list
            Violations of the file rules. If this is not empty, the draft is
            unchanged and any previously attached file is kept.

        """
        errors = validate_file(upload)
        if upload.stream is None:
            errors.append(NO_CONTENT)
        if errors:
            logger.warning('Rejected primary file %s: %s', upload.name,
                           '; '.join(errors))
            return errors
        self.draft.primary_file = self._accept(upload)
        logger.debug('Attached primary file %s', upload.name)
        return []

    def attach_supplementary(self, upload: UploadedFile) -> FileRef:
        """
        Append a supplementary file.

        Raises
        ------
        ValueError
            If the upload has no content stream.

        """
        ref = self._accept(upload)
        self.draft.supplementary_files.append(ref)
        logger.debug('Attached supplementary file %s', upload.name)
        return ref

    def remove_supplementary(self, file_id: str) -> None:
        """Remove a supplementary file, if it is attached."""
        self.draft.supplementary_files = [
            ref for ref in self.draft.supplementary_files
            if ref.file_id != file_id
        ]

    def _accept(self, upload: UploadedFile) -> FileRef:
        if upload.stream is None:
            raise ValueError(f'{NO_CONTENT}: {upload.name}')
        if self.store is not None:
            handle = self.store.put(upload.stream, upload.name)
        else:
            handle = upload.stream
        return FileRef(file_id=uuid.uuid4().hex,
                       original_file_name=upload.name,
                       mime_type=upload.mime_type,
                       size_bytes=upload.size_bytes,
                       uploaded_at=get_tzaware_utc_now(),
                       handle=handle)
