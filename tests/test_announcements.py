import pytest

from dabparse.announcements import (
    AnnouncementSupport,
    AnnouncementSwitching,
    OeAnnouncementSupport,
    OeAnnouncementSwitching,
    OeAnnouncementTarget,
    decode_announcement_flags,
    parse_announcement_support,
    parse_announcement_switching,
    parse_oe_announcement_support,
    parse_oe_announcement_switching,
)
from dabparse.fig0 import FigTruncatedError


def test_decode_flags_single_bits():
    assert decode_announcement_flags(0x0001) == (0,)
    assert decode_announcement_flags(0x8000) == (15,)
    assert decode_announcement_flags(0x0000) == ()


@pytest.mark.parametrize("flags", [0x0003, 0xFFFF, 0x1234, 0xA5A5, 0x0400])
def test_decode_flags_reconstructs_and_descends(flags):
    types = decode_announcement_flags(flags)
    assert sum(1 << t for t in types) == flags
    assert list(types) == sorted(types, reverse=True)


def test_announcement_support_entry():
    data = bytes([0x12, 0xD2, 0x10, 0x00, 0x03, 0x02, 0x05, 0x07])
    assert parse_announcement_support(data) == [
        AnnouncementSupport(service_id=0xD210, supported_announcements=(1, 0), cluster_ids=(0x05, 0x07))
    ]


def test_announcement_support_without_clusters_and_rfa_ignored():
    data = bytes([0x12, 0x11, 0x22, 0x80, 0x00, 0xF8, 0x33, 0x44, 0x00, 0x01, 0x01, 0x09])
    first, second = parse_announcement_support(data)
    assert first.service_id == 0x1122
    assert first.supported_announcements == (15,)
    assert first.cluster_ids == ()
    assert second.service_id == 0x3344
    assert second.cluster_ids == (0x09,)


def test_announcement_support_truncated_cluster_list():
    with pytest.raises(FigTruncatedError):
        parse_announcement_support(bytes([0x12, 0xD2, 0x10, 0x00, 0x03, 0x02, 0x05]))


def test_announcement_switching_entry():
    data = bytes([0x13, 0x05, 0x00, 0x02, 0x85])
    assert parse_announcement_switching(data) == [
        AnnouncementSwitching(cluster_id=0x05, announcements_switched=(1,), is_newly_introduced=True, subchannel_id=0x05)
    ]


def test_announcement_switching_end_of_announcement():
    data = bytes([0x13, 0x05, 0x00, 0x00, 0x3F])
    (entry,) = parse_announcement_switching(data)
    assert entry.announcements_switched == ()
    assert entry.is_newly_introduced is False
    assert entry.subchannel_id == 0x3F


def test_announcement_switching_truncated():
    with pytest.raises(FigTruncatedError):
        parse_announcement_switching(bytes([0x13, 0x05, 0x00]))


def test_oe_announcement_support_with_targets():
    data = bytes([0x19, 0xD2, 0x10, 0x00, 0x01, 0x02, 0x07, 0x10, 0x01, 0x08, 0x10, 0x02])
    assert parse_oe_announcement_support(data) == [
        OeAnnouncementSupport(
            service_id=0xD210,
            supported_announcements=(0,),
            targets=(
                OeAnnouncementTarget(cluster_id=0x07, ensemble_id=0x1001),
                OeAnnouncementTarget(cluster_id=0x08, ensemble_id=0x1002),
            ),
        )
    ]


def test_oe_announcement_support_truncated_target():
    with pytest.raises(FigTruncatedError):
        parse_oe_announcement_support(bytes([0x19, 0xD2, 0x10, 0x00, 0x01, 0x01, 0x07, 0x10]))


def test_oe_announcement_switching_entry():
    data = bytes([0x1A, 0x07, 0x80, 0x00, 0x83, 0xD2, 0x20])
    assert parse_oe_announcement_switching(data) == [
        OeAnnouncementSwitching(
            cluster_id=0x07,
            announcements_switched=(15,),
            is_newly_introduced=True,
            scids=0x03,
            target_service_id=0xD220,
        )
    ]


def test_oe_announcement_switching_truncated():
    with pytest.raises(FigTruncatedError):
        parse_oe_announcement_switching(bytes([0x1A, 0x07, 0x80, 0x00, 0x83, 0xD2]))


def test_header_only_gives_empty_lists():
    assert parse_announcement_support(bytes([0x12])) == []
    assert parse_announcement_switching(bytes([0x13])) == []
    assert parse_oe_announcement_support(bytes([0x19])) == []
    assert parse_oe_announcement_switching(bytes([0x1A])) == []