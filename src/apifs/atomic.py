"""
All-or-nothing write support.

This module provides the file object handed out for writable paths: writes
are buffered in memory and delivered to the directory in a single call when
the file is closed.
"""

import io


class PendingWrite(io.BytesIO):
    """
    Binary buffer that commits its whole content on close.

    Nothing reaches the directory until ``close()``; leaving a ``with`` block
    because of an exception discards the buffer instead.
    """

    def __init__(self, directory, path):
        super().__init__()
        self.directory = directory
        self.path = path
        self.result = None

    def close(self):
        """Close the buffer and hand its content to the directory."""
        if self.closed:
            return

        payload = self.getvalue()
        super().close()
        self.result = self.directory.write(self.path, payload)

    def discard(self):
        """Close the buffer without writing anything."""
        if not self.closed:
            super().close()

    def __del__(self):
        # Only an explicit close commits; a collected buffer is dropped
        self.discard()

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is not None:
            self.discard()
        else:
            self.close()


class PendingTextWrite(io.TextIOWrapper):
    """
    Text-mode version of PendingWrite.

    Encodes text into a ``PendingWrite`` buffer and keeps its discard-on-error
    behaviour when used as a context manager.
    """

    def __init__(self, directory, path, encoding="utf-8", errors=None, newline=None):
        super().__init__(
            PendingWrite(directory, path),
            encoding=encoding,
            errors=errors,
            newline=newline,
        )

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is not None:
            self.buffer.discard()
        else:
            self.close()

    def __del__(self):
        self.buffer.discard()
