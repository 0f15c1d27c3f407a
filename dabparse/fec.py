"""FIG 0/14: FEC sub-channel organisation."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from dabparse.fig0 import begin_fig0


class FecScheme(IntEnum):
    """Additional forward error correction applied to a packet sub-channel."""

    NOT_APPLIED = 0
    APPLIED = 1
    RESERVED0 = 2
    RESERVED1 = 3


@dataclass(frozen=True)
class FecSchemeDescription:
    """The FEC scheme of one sub-channel."""

    subchannel_id: int
    fec_scheme: FecScheme


def parse_fec_schemes(data, header=None) -> list[FecSchemeDescription]:
    """Parse all sub-channel entries of a FIG 0/14."""
    _, reader = begin_fig0(data, header)
    result = []
    while reader:
        value = reader.read_u8()
        result.append(
            FecSchemeDescription(
                subchannel_id=(value & 0xFC) >> 2,
                fec_scheme=FecScheme(value & 0x03),
            )
        )
    return result