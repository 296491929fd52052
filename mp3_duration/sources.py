import logging
import os
import re
from typing import Optional, Union

import requests

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10
CHUNK_SIZE = 64 * 1024


class UnsupportedInputError(TypeError):
    pass


class ByteSource:
    """Random access reads over an mp3 stream.

    ``read_at`` returns fewer bytes than asked for only when the end of the
    data is reached.
    """

    def size(self) -> Optional[int]:
        raise NotImplementedError

    def read_at(self, offset: int, length: int) -> bytes:
        raise NotImplementedError

    def close(self):
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


class BufferSource(ByteSource):
    def __init__(self, data: Union[bytes, bytearray, memoryview]):
        self.data = bytes(data)

    def size(self) -> int:
        return len(self.data)

    def read_at(self, offset: int, length: int) -> bytes:
        return self.data[offset : offset + length]


class FileSource(ByteSource):
    def __init__(self, path: Union[str, os.PathLike]):
        self.path = path
        self._file = open(path, "rb")

    def size(self) -> int:
        return os.fstat(self._file.fileno()).st_size

    def read_at(self, offset: int, length: int) -> bytes:
        self._file.seek(offset)
        return self._file.read(length)

    def close(self):
        self._file.close()


class RemoteSource(ByteSource):
    """Reads a url through http range requests.

    Each request fetches ``chunk_size`` bytes and small reads are served from
    that chunk. A server that ignores ``Range`` sends the whole body, which is
    kept and served from memory.
    """

    range_regex = re.compile(r"([^\s]+)\s((([\d]+)-([\d]+))|\*)/([\d]+|\*)")

    def __init__(
        self, url: str, timeout: float = DEFAULT_TIMEOUT, chunk_size: int = CHUNK_SIZE
    ):
        self.url = url
        self.timeout = timeout
        self.chunk_size = chunk_size
        self.session = requests.Session()
        self._total_size = None
        self._body = None
        self._chunk = b""
        self._chunk_start = 0

    def _parse_content_range(self, range_string):
        match = self.range_regex.match(range_string or "")
        if not match:
            return None
        size = match.groups()[5]
        if size == "*":
            return None
        return int(size)

    def size(self) -> Optional[int]:
        if self._total_size is None:
            response = self.session.head(
                self.url, allow_redirects=True, timeout=self.timeout
            )
            response.raise_for_status()
            content_length = response.headers.get("content-length")
            if content_length is not None:
                self._total_size = int(content_length)
        return self._total_size

    def _in_chunk(self, offset: int, end: int) -> bool:
        chunk_end = self._chunk_start + len(self._chunk)
        if offset < self._chunk_start or offset >= chunk_end:
            return False
        return end <= chunk_end or chunk_end == self._total_size

    def _fetch(self, offset: int, length: int):
        headers = {"Range": f"bytes={offset}-{offset + length - 1}"}
        response = self.session.get(self.url, headers=headers, timeout=self.timeout)
        if response.status_code == 416:
            total_size = self._parse_content_range(
                response.headers.get("content-range")
            )
            if total_size is not None:
                self._total_size = total_size
            self._chunk, self._chunk_start = b"", offset
            return
        response.raise_for_status()

        if response.status_code != 206:
            logger.warning("%s ignored range request, keeping full body", self.url)
            self._body = response.content
            self._total_size = len(self._body)
            return

        total_size = self._parse_content_range(response.headers.get("content-range"))
        if total_size is not None:
            self._total_size = total_size
        self._chunk, self._chunk_start = response.content, offset

    def read_at(self, offset: int, length: int) -> bytes:
        if length <= 0:
            return b""
        if self._body is not None:
            return self._body[offset : offset + length]
        if self._total_size is not None and offset >= self._total_size:
            return b""

        end = offset + length
        if not self._in_chunk(offset, end):
            self._fetch(offset, max(length, self.chunk_size))
            if self._body is not None:
                return self._body[offset : offset + length]

        start = offset - self._chunk_start
        return self._chunk[start : start + length]

    def close(self):
        self.session.close()


def is_remote(value: str) -> bool:
    return value.startswith(("http://", "https://"))


def open_source(value, timeout: float = DEFAULT_TIMEOUT) -> ByteSource:
    if isinstance(value, str) and is_remote(value):
        return RemoteSource(value, timeout=timeout)
    if isinstance(value, (str, os.PathLike)):
        return FileSource(value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return BufferSource(value)
    raise UnsupportedInputError(f"unrecognised input format '{type(value).__name__}'")
