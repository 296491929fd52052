from enum import IntEnum
from typing import Sequence


class Version(IntEnum):
    V2_5 = 0b00
    RESERVED = 0b01
    V2 = 0b10
    V1 = 0b11


class Layer(IntEnum):
    RESERVED = 0b00
    L3 = 0b01
    L2 = 0b10
    L1 = 0b11


# indexed by Version bits, then Layer bits: reserved, layer 3, layer 2, layer 1
_NO_BITRATES = (0,) * 16

_MPEG2_BITRATES = (
    _NO_BITRATES,
    (0, 8, 16, 24, 32, 40, 48, 56, 64, 80, 96, 112, 128, 144, 160, 0),
    (0, 8, 16, 24, 32, 40, 48, 56, 64, 80, 96, 112, 128, 144, 160, 0),
    (0, 32, 48, 56, 64, 80, 96, 112, 128, 144, 160, 176, 192, 224, 256, 0),
)

bitrates = (
    # MPEG 2.5 shares the MPEG 2 table
    _MPEG2_BITRATES,
    # Reserved
    (_NO_BITRATES,) * 4,
    # MPEG 2
    _MPEG2_BITRATES,
    # MPEG 1
    (
        _NO_BITRATES,
        (0, 32, 40, 48, 56, 64, 80, 96, 112, 128, 160, 192, 224, 256, 320, 0),
        (0, 32, 48, 56, 64, 80, 96, 112, 128, 160, 192, 224, 256, 320, 384, 0),
        (0, 32, 64, 96, 128, 160, 192, 224, 256, 288, 320, 352, 384, 416, 448, 0),
    ),
)

sampling_rates = (
    # MPEG 2.5
    (11025, 12000, 8000, 0),
    # Reserved
    (0, 0, 0, 0),
    # MPEG 2
    (22050, 24000, 16000, 0),
    # MPEG 1
    (44100, 48000, 32000, 0),
)

samples_per_frame = (
    # MPEG 2.5
    (0, 576, 1152, 384),
    # Reserved
    (0, 0, 0, 0),
    # MPEG 2
    (0, 576, 1152, 384),
    # MPEG 1
    (0, 1152, 1152, 384),
)

ID3V2_HEADER_SIZE = 10
ID3V2_FOOTER_SIZE = 10
ID3V2_FOOTER_FLAG = 0x10


class FrameHeader:
    def __init__(
        self,
        version: Version,
        layer: Layer,
        bitrate: int,
        sampling_rate: int,
        padding: int,
        samples: int,
        frame_size: int,
    ):
        self.version = version
        self.layer = layer
        self.bitrate = bitrate
        self.sampling_rate = sampling_rate
        self.padding = padding
        self.samples = samples
        self.frame_size = frame_size

    @property
    def is_valid(self) -> bool:
        return self.frame_size > 0 and self.samples > 0

    @property
    def duration(self) -> float:
        if not self.sampling_rate:
            return 0.0
        return self.samples / self.sampling_rate

    def __repr__(self):
        return (
            f"FrameHeader(version={self.version.name}, layer={self.layer.name}, "
            f"bitrate={self.bitrate}, sampling_rate={self.sampling_rate}, "
            f"padding={self.padding}, samples={self.samples}, "
            f"frame_size={self.frame_size})"
        )


def read_synchsafe_integer(buffer: Sequence[int], size: int, offset: int = 0) -> int:
    mask = 0x7F
    out = 0

    for i in range(size):
        out = (out << 7) | (buffer[i + offset] & mask)
    return out


def is_synchsafe(buffer: Sequence[int], size: int, offset: int = 0) -> bool:
    return all(buffer[i + offset] & 0x80 == 0 for i in range(size))


def skip_id3(buffer: Sequence[int]) -> int:
    """Return the number of bytes taken by a leading ID3v2 tag, or 0.

    Only the first 10 bytes are looked at. A tag whose size bytes are not
    synchsafe is treated as absent.
    """
    if len(buffer) < ID3V2_HEADER_SIZE:
        return 0
    if buffer[0] != 0x49 or buffer[1] != 0x44 or buffer[2] != 0x33:
        return 0
    if not is_synchsafe(buffer, 4, 6):
        return 0

    footer_size = ID3V2_FOOTER_SIZE if buffer[5] & ID3V2_FOOTER_FLAG else 0
    return ID3V2_HEADER_SIZE + read_synchsafe_integer(buffer, 4, 6) + footer_size


def has_frame_sync(buffer: Sequence[int]) -> bool:
    return len(buffer) >= 2 and buffer[0] == 0xFF and buffer[1] & 0xE0 == 0xE0


def is_id3v1_tag(buffer: Sequence[int]) -> bool:
    return len(buffer) >= 3 and buffer[0] == 0x54 and buffer[1] == 0x41 and buffer[2] == 0x47


def _table_version(version: Version) -> Version:
    if version is Version.V2_5:
        return Version.V2
    return version


def frame_size(samples: int, layer: Layer, bitrate: int, sampling_rate: int, padding: int) -> int:
    if not sampling_rate:
        return 0
    slot = 4 if layer is Layer.L1 else 1
    return samples * bitrate * 125 // sampling_rate + padding * slot


def parse_frame_header(header: Sequence[int]) -> FrameHeader:
    """Decode the version, layer, bitrate and sampling rate fields of a header.

    The sync word is not checked here. Reserved or out of range fields decode
    to zero, which leaves the returned header invalid.
    """
    b1, b2 = header[1], header[2]
    version = Version((b1 & 0x18) >> 3)
    layer = Layer((b1 & 0x06) >> 1)
    bitrate_bits = (b2 & 0xF0) >> 4
    sampling_rate_bits = (b2 & 0x0C) >> 2
    padding = (b2 & 0x02) >> 1

    table_version = _table_version(version)
    bitrate = bitrates[table_version][layer][bitrate_bits]
    sampling_rate = sampling_rates[version][sampling_rate_bits]
    samples = samples_per_frame[table_version][layer]

    return FrameHeader(
        version=version,
        layer=layer,
        bitrate=bitrate,
        sampling_rate=sampling_rate,
        padding=padding,
        samples=samples,
        frame_size=frame_size(samples, layer, bitrate, sampling_rate, padding),
    )
