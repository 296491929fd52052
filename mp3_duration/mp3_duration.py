import logging
from typing import Optional

from mp3_duration.frame import (
    FrameHeader,
    has_frame_sync,
    is_id3v1_tag,
    parse_frame_header,
    skip_id3,
)
from mp3_duration.sources import DEFAULT_TIMEOUT, ByteSource, open_source

logger = logging.getLogger(__name__)

MIN_FILE_SIZE = 100
HEADER_WINDOW_SIZE = 10
ID3V1_TAG_SIZE = 128


def round_duration(duration: float) -> float:
    return round(duration, 3)


def estimate_duration(bitrate: int, offset: int, total_size: int) -> float:
    bytes_per_second = bitrate * 1000 / 8
    return round_duration((total_size - offset) / bytes_per_second)


def scan(source: ByteSource, cbr_estimate: bool = False) -> float:
    """Walk the frame headers of ``source`` and return its duration in seconds.

    With ``cbr_estimate`` the scan stops at the first usable frame and
    extrapolates its bitrate over the rest of the stream.
    """
    head = source.read_at(0, MIN_FILE_SIZE)
    if len(head) < MIN_FILE_SIZE:
        logger.debug("stream shorter than %d bytes", MIN_FILE_SIZE)
        return 0

    total_size = source.size()
    if total_size is None:
        logger.warning("unable to determine stream size")
        return 0

    offset = skip_id3(head)
    if offset:
        logger.debug("skipping %d bytes of ID3v2 tag", offset)

    duration = 0.0
    frames = 0
    resyncs = 0
    last_frame: Optional[FrameHeader] = None

    while offset < total_size:
        window = source.read_at(offset, HEADER_WINDOW_SIZE)
        if len(window) < HEADER_WINDOW_SIZE:
            break

        if has_frame_sync(window):
            frame = parse_frame_header(window)
            if frame.is_valid:
                offset += frame.frame_size
                duration += frame.duration
                frames += 1
                last_frame = frame
            else:
                offset += 1
                resyncs += 1
        elif is_id3v1_tag(window):
            logger.debug("skipping ID3v1 tag at %d", offset)
            offset += ID3V1_TAG_SIZE
        else:
            offset += 1
            resyncs += 1

        # free format frames carry no bitrate to extrapolate from
        if cbr_estimate and last_frame is not None and last_frame.bitrate:
            logger.debug("estimating from %r at %d", last_frame, offset)
            return estimate_duration(last_frame.bitrate, offset, total_size)

    logger.debug(
        "scanned %d frames, %d resync bytes, last frame %r", frames, resyncs, last_frame
    )
    return round_duration(duration)


def get_mp3_duration(mp3, cbr_estimate: bool = False, timeout: float = DEFAULT_TIMEOUT) -> float:
    """Return the duration in seconds of an mp3 file path, url or byte buffer."""
    if isinstance(mp3, ByteSource):
        return scan(mp3, cbr_estimate)
    with open_source(mp3, timeout=timeout) as source:
        return scan(source, cbr_estimate)
