from mp3_duration.mp3_duration import estimate_duration, get_mp3_duration, scan
from mp3_duration.sources import (
    BufferSource,
    ByteSource,
    FileSource,
    RemoteSource,
    UnsupportedInputError,
)

__all__ = [
    "BufferSource",
    "ByteSource",
    "FileSource",
    "RemoteSource",
    "UnsupportedInputError",
    "estimate_duration",
    "get_mp3_duration",
    "scan",
]
