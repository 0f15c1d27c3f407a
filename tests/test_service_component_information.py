import pytest

from dabparse.fig0 import Fig0Header, FigTruncatedError
from dabparse.service_component_information import (
    ChangeType,
    PartTime,
    parse_service_component_information,
)


def _flags(scids, change, part_time, sc_flag):
    return scids << 4 | change << 2 | part_time << 1 | sc_flag


def _time_bytes(date, hour, minute, second, sid_flag, eid_flag):
    return bytes(
        [
            date << 3 | hour >> 2,
            (hour & 0x03) << 6 | minute,
            second << 2 | sid_flag << 1 | eid_flag,
        ]
    )


def test_short_entry_without_sc_information():
    data = bytes([0x14, 0xC2, 0x21, _flags(3, 1, 1, 0)])
    (entry,) = parse_service_component_information(data)
    assert entry.service_id == 0xC221
    assert entry.scids == 3
    assert entry.change_type is ChangeType.ADDED_TO_ENSEMBLE
    assert entry.part_time is PartTime.ON_OFF_AIR_CYCLE
    assert entry.has_sc_information is False
    assert entry.sc_type is None
    assert entry.transferred_service_id is None


def test_full_entry_with_transfer_ids():
    data = (
        bytes([0x14, 0xC2, 0x21, _flags(0, 2, 0, 1), 0xC0 | 0x05])
        + _time_bytes(15, 13, 45, 30, 1, 1)
        + bytes([0xD2, 0x22, 0x10, 0x01])
    )
    (entry,) = parse_service_component_information(data)
    assert entry.change_type is ChangeType.REMOVED_FROM_ENSEMBLE
    assert entry.part_time is PartTime.ON_OFF_AIR_CONTINUOUSLY
    assert entry.has_sc_information is True
    assert entry.ca_applied is True
    assert entry.is_data_component is True
    assert entry.sc_type == 5
    assert (entry.date, entry.hour, entry.minute, entry.second) == (15, 13, 45, 30)
    assert entry.transferred_service_id == 0xD222
    assert entry.transferred_ensemble_id == 0x1001


def test_sid_flag_without_eid_flag():
    data = (
        bytes([0x14, 0x00, 0x01, _flags(1, 0, 0, 1), 0x00])
        + _time_bytes(1, 0, 0, 0, 1, 0)
        + bytes([0x00, 0x02])
    )
    (entry,) = parse_service_component_information(data)
    assert entry.change_type is ChangeType.REMAINS_WITH_NEW_SID
    assert entry.transferred_service_id == 0x0002
    assert entry.transferred_ensemble_id is None


def test_eid_ignored_without_sid_flag():
    data = (
        bytes([0x14, 0x00, 0x01, _flags(1, 3, 0, 1), 0x00])
        + _time_bytes(1, 2, 3, 4, 0, 1)
        + bytes([0x00, 0x05, _flags(2, 0, 0, 0)])
    )
    entries = parse_service_component_information(data)
    assert len(entries) == 2
    assert entries[0].change_type is ChangeType.REMOVED_FROM_ALL_ENSEMBLES
    assert entries[0].transferred_ensemble_id is None
    assert entries[1].service_id == 0x0005
    assert entries[1].scids == 2


def test_data_service_uses_32_bit_ids():
    data = (
        bytes([0x34, 0xE1, 0x23, 0x45, 0x67, _flags(0, 0, 0, 1), 0x3F])
        + _time_bytes(0, 0, 0, 0, 1, 0)
        + bytes([0xE1, 0x00, 0x00, 0x09])
    )
    (entry,) = parse_service_component_information(data)
    assert entry.service_id == 0xE1234567
    assert entry.sc_type == 0x3F
    assert entry.transferred_service_id == 0xE1000009


def test_explicit_header_overrides_first_byte():
    header = Fig0Header(is_data_service=True, extension=20)
    data = bytes([0x14, 0x01, 0x02, 0x03, 0x04, _flags(4, 0, 0, 0)])
    (entry,) = parse_service_component_information(data, header)
    assert entry.service_id == 0x01020304
    assert entry.scids == 4


def test_empty_body_yields_no_entries():
    assert parse_service_component_information(bytes([0x14])) == []


def test_truncated_entry_raises():
    data = bytes([0x14, 0xC2, 0x21, _flags(0, 0, 0, 1), 0x00, 0x00])
    with pytest.raises(FigTruncatedError):
        parse_service_component_information(data)