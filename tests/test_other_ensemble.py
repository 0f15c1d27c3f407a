import pytest

from dabparse.fig0 import Fig0Header, FigTruncatedError
from dabparse.other_ensemble import parse_other_ensemble_services

EXT_24 = 0x18


def test_programme_service_with_sorted_ensemble_ids():
    ca_id = 2
    eids = [0x3002, 0x1001, 0x2003]
    data = bytes([EXT_24, 0x12, 0x34, ca_id << 4 | len(eids)])
    for eid in eids:
        data += eid.to_bytes(2, "big")
    (info,) = parse_other_ensemble_services(data)
    assert info.service_id == 0x1234
    assert info.ca_id == ca_id
    assert info.ensemble_ids == tuple(sorted(eids))
    assert info.is_cei is False
    assert info.is_other_ensemble is False


def test_data_service_uses_32_bit_sid_and_other_ensemble_flag():
    data = bytes([0x40 | 0x20 | EXT_24, 0xE1, 0x23, 0x45, 0x67, 0x01, 0xAB, 0xCD])
    (info,) = parse_other_ensemble_services(data)
    assert info.service_id == 0xE1234567
    assert info.ensemble_ids == (0xABCD,)
    assert info.is_other_ensemble is True


def test_empty_eid_list_is_change_event():
    data = bytes([EXT_24, 0x56, 0x78, 0x00])
    (info,) = parse_other_ensemble_services(data)
    assert info.is_cei is True
    assert info.ensemble_ids == ()


def test_multiple_entries():
    data = bytes([EXT_24, 0x10, 0x01, 0x01, 0xAA, 0xBB, 0x10, 0x02, 0x00])
    infos = parse_other_ensemble_services(data)
    assert [i.service_id for i in infos] == [0x1001, 0x1002]
    assert [i.is_cei for i in infos] == [False, True]


def test_explicit_header_overrides_first_byte():
    data = bytes([0x00, 0xE1, 0x23, 0x45, 0x67, 0x00])
    header = Fig0Header(is_data_service=True, extension=24)
    (info,) = parse_other_ensemble_services(data, header)
    assert info.service_id == 0xE1234567


def test_truncated_eid_list_raises():
    data = bytes([EXT_24, 0x12, 0x34, 0x02, 0x10, 0x01])
    with pytest.raises(FigTruncatedError):
        parse_other_ensemble_services(data)


def test_header_only_yields_no_entries():
    assert parse_other_ensemble_services(bytes([EXT_24])) == []