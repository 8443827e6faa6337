"""
Keep uploaded files on the local filesystem.

Content is written beneath ``FILESTORE_ROOT``, under a name derived from the
MD5 checksum of its content. Two uploads with the same content therefore
share a single file on disk.
"""

import logging
import os
import shutil
import tempfile
from base64 import urlsafe_b64encode
from hashlib import md5
from typing import IO, Optional

from ..context import get_application_config

logger = logging.getLogger(__name__)

CHUNK_SIZE = 4096


class ConfigurationError(RuntimeError):
    """A required parameter is invalid/missing from the application config."""


class SecurityError(RuntimeError):
    """Something suspicious happened."""


class LocalFileStore:
    """A :class:`.FileStore` backed by a directory."""

    def __init__(self, root: str) -> None:
        """Make sure that there is somewhere to put files."""
        if not root:
            raise ConfigurationError('FILESTORE_ROOT is not set')
        self.root = os.path.abspath(root)
        if not os.path.exists(self.root):
            os.makedirs(self.root)

    def put(self, stream: IO[bytes], filename: str) -> str:
        """
        Store the content of ``stream``.

        Parameters
        ----------
        stream : io.BytesIO
            Readable binary stream; it is read from the current position.
        filename : str
            Original name of the file. Only the extension is kept.

        Returns
        -------
        str
            Handle for the stored content, relative to the store root.

        """
        _, ext = os.path.splitext(os.path.basename(filename))
        hash_md5 = md5()
        fd, tmp_path = tempfile.mkstemp(dir=self.root)
        try:
            with os.fdopen(fd, 'wb') as f:
                for chunk in iter(lambda: stream.read(CHUNK_SIZE), b''):
                    hash_md5.update(chunk)
                    f.write(chunk)
        except Exception:
            os.remove(tmp_path)
            raise
        checksum = urlsafe_b64encode(hash_md5.digest()).decode('utf-8')
        handle = checksum.rstrip('=') + ext.lower()
        shutil.move(tmp_path, self._path(handle))
        logger.debug('Stored %s as %s', filename, handle)
        return handle

    def open(self, handle: str) -> IO[bytes]:
        """Open stored content for reading."""
        return open(self._path(handle), 'rb')

    def exists(self, handle: str) -> bool:
        """Check whether content is stored for ``handle``."""
        return os.path.exists(self._path(handle))

    def _path(self, handle: str) -> str:
        path = os.path.abspath(os.path.join(self.root, handle))
        if os.path.dirname(path) != self.root:
            raise SecurityError(f'Not a valid handle: {handle}')
        return path


def get_store(app: Optional[object] = None) -> LocalFileStore:
    """Create a :class:`.LocalFileStore` using the application config."""
    config = get_application_config(app)
    return LocalFileStore(config.get('FILESTORE_ROOT', '/tmp/manuscripts'))
