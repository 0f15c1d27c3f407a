import pytest

from dabparse.fec import FecScheme, FecSchemeDescription, parse_fec_schemes
from dabparse.fig0 import FigTruncatedError

EXT_14 = 0x0E


def _entry(subchannel, scheme):
    return subchannel << 2 | scheme


def test_single_entry():
    data = bytes([EXT_14, _entry(5, FecScheme.APPLIED)])
    assert parse_fec_schemes(data) == [FecSchemeDescription(5, FecScheme.APPLIED)]


@pytest.mark.parametrize("scheme", list(FecScheme))
def test_every_scheme_value_decodes(scheme):
    (desc,) = parse_fec_schemes(bytes([EXT_14, _entry(63, scheme)]))
    assert desc.fec_scheme is scheme
    assert desc.subchannel_id == 63


def test_multiple_entries_keep_order():
    pairs = [(1, FecScheme.NOT_APPLIED), (12, FecScheme.APPLIED), (0, FecScheme.RESERVED1)]
    data = bytes([EXT_14] + [_entry(s, f) for s, f in pairs])
    result = parse_fec_schemes(data)
    assert [(d.subchannel_id, d.fec_scheme) for d in result] == pairs


def test_header_only_yields_nothing():
    assert parse_fec_schemes(bytes([EXT_14])) == []


def test_empty_data_raises():
    with pytest.raises(FigTruncatedError):
        parse_fec_schemes(b"")