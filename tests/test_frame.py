import pytest

from mp3_duration.frame import (
    Layer,
    Version,
    bitrates,
    frame_size,
    has_frame_sync,
    is_id3v1_tag,
    parse_frame_header,
    read_synchsafe_integer,
    samples_per_frame,
    sampling_rates,
    skip_id3,
)
from mp3_fixtures import id3v2_tag, synchsafe


def header(b1, b2):
    return bytes([0xFF, b1, b2, 0x00])


def test_parse_mpeg1_layer3():
    frame = parse_frame_header(header(0xFB, 0x90))

    assert frame.version is Version.V1
    assert frame.layer is Layer.L3
    assert frame.bitrate == 128
    assert frame.sampling_rate == 44100
    assert frame.padding == 0
    assert frame.samples == 1152
    assert frame.frame_size == 417
    assert frame.is_valid


def test_padding_adds_one_byte():
    frame = parse_frame_header(header(0xFB, 0x92))

    assert frame.padding == 1
    assert frame.frame_size == 418


def test_layer1_padding_adds_four_bytes():
    frame = parse_frame_header(header(0xFF, 0x92))

    assert frame.layer is Layer.L1
    assert frame.bitrate == 288
    assert frame.samples == 384
    assert frame.frame_size == 317


def test_mpeg2_layer3():
    frame = parse_frame_header(header(0xF3, 0x80))

    assert frame.version is Version.V2
    assert frame.bitrate == 64
    assert frame.sampling_rate == 22050
    assert frame.samples == 576
    assert frame.frame_size == 208


def test_mpeg25_uses_mpeg2_tables_with_own_sampling_rates():
    frame = parse_frame_header(header(0xE3, 0x80))

    assert frame.version is Version.V2_5
    assert frame.bitrate == 64
    assert frame.sampling_rate == 11025
    assert frame.samples == 576
    assert frame.frame_size == 417


def test_reserved_version_is_invalid():
    frame = parse_frame_header(header(0xEB, 0x90))

    assert frame.version is Version.RESERVED
    assert frame.bitrate == 0
    assert frame.sampling_rate == 0
    assert frame.frame_size == 0
    assert not frame.is_valid


def test_reserved_layer_is_invalid():
    frame = parse_frame_header(header(0xF9, 0x92))

    assert frame.layer is Layer.RESERVED
    assert frame.samples == 0
    assert frame.frame_size == 0
    assert not frame.is_valid


def test_reserved_sampling_rate_never_divides_by_zero():
    frame = parse_frame_header(header(0xFB, 0x9C))

    assert frame.sampling_rate == 0
    assert frame.samples == 1152
    assert frame.frame_size == 0
    assert frame.duration == 0.0
    assert not frame.is_valid


def test_bad_bitrate_index_decodes_to_zero():
    frame = parse_frame_header(header(0xFB, 0xF0))

    assert frame.bitrate == 0
    assert frame.frame_size == 0


def test_free_format_frame_with_padding_is_one_byte():
    frame = parse_frame_header(header(0xFB, 0x02))

    assert frame.bitrate == 0
    assert frame.frame_size == 1
    assert frame.is_valid


def test_frame_size_without_sampling_rate():
    assert frame_size(1152, Layer.L3, 128, 0, 1) == 0


@pytest.mark.parametrize("size", [0, 1, 127, 128, 300, 16384, 0x0FFFFFFF])
def test_skip_id3_returns_header_plus_body(size):
    tag = id3v2_tag(size, body=b"")

    assert skip_id3(tag) == 10 + size


def test_skip_id3_counts_footer():
    tag = id3v2_tag(300, footer=True, body=b"")

    assert skip_id3(tag) == 10 + 300 + 10


def test_skip_id3_without_tag():
    assert skip_id3(bytes([0xFF, 0xFB, 0x90, 0x00]) + bytes(6)) == 0
    assert skip_id3(b"ID") == 0


def test_skip_id3_rejects_size_with_high_bit():
    tag = b"ID3\x03\x00\x00" + bytes([0x00, 0x00, 0x80, 0x00])

    assert skip_id3(tag) == 0


def test_read_synchsafe_integer():
    assert read_synchsafe_integer(synchsafe(300), 4) == 300
    assert read_synchsafe_integer(b"xx" + synchsafe(2 ** 21 + 5), 4, 2) == 2 ** 21 + 5


def test_frame_sync_and_id3v1_markers():
    assert has_frame_sync(b"\xff\xe0")
    assert has_frame_sync(b"\xff\xfb\x90")
    assert not has_frame_sync(b"\xff\xd0")
    assert not has_frame_sync(b"\xfe\xfb")
    assert is_id3v1_tag(b"TAGxyz")
    assert not is_id3v1_tag(b"TA")


@pytest.mark.parametrize("table", [bitrates, sampling_rates, samples_per_frame])
def test_lookup_tables_are_immutable(table):
    assert isinstance(table, tuple)
    assert len(table) == len(Version)
    assert all(isinstance(row, tuple) for row in table)
    with pytest.raises(TypeError):
        table[Version.V1] = ()


def test_lookup_tables_index_by_header_bits():
    assert bitrates[Version.V1][Layer.L3][9] == 128
    assert bitrates[Version.V2][Layer.L1][14] == 256
    assert bitrates[Version.RESERVED][Layer.L3][9] == 0
    assert sampling_rates[Version.V2_5][2] == 8000
    assert samples_per_frame[Version.V2][Layer.L3] == 576
    assert samples_per_frame[Version.V1][Layer.RESERVED] == 0
