import io

from .stream import SubStream
from .window import Whence


class SubStreamFile(io.RawIOBase):
    """
    A raw binary file object over an open SubStream, so a window can be
    handed to io.BufferedReader, shutil.copyfileobj and similar consumers.
    Closing the file closes the window.
    """

    def __init__(self, stream: SubStream):
        if not stream.is_open:
            raise ValueError("SubStream must be open")
        self._stream = stream

    @property
    def stream(self) -> SubStream:
        return self._stream

    def readable(self) -> bool:
        return True

    def seekable(self) -> bool:
        return True

    def writable(self) -> bool:
        return False

    def readinto(self, b) -> int:
        self._checkClosed()
        view = memoryview(b).cast("B")
        data = self._stream.read(len(view))
        if data is None:
            raise OSError(str(self._stream.error) if self._stream.error else "read failed")
        view[: len(data)] = data
        return len(data)

    def tell(self) -> int:
        self._checkClosed()
        position = self._stream.tell()
        # None only when the cursor sits one past the last byte
        if position is None:
            return self._stream.stat().size
        return position

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        """
        Seek within the window.

        Raises:
            OSError: If the target lies outside [0, length)
        """
        self._checkClosed()
        if not self._stream.seek(offset, Whence(whence)):
            raise OSError(f"Seek to {offset} (whence={whence}) outside the window")
        return self.tell()

    def close(self) -> None:
        if not self.closed:
            self._stream.close()
        super().close()

    def __repr__(self) -> str:
        return f"SubStreamFile({self._stream!r})"
