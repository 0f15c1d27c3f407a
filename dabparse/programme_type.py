"""FIG 0/17: programme type."""

from __future__ import annotations

from dataclasses import dataclass

from dabparse.fig0 import begin_fig0


@dataclass(frozen=True)
class ProgrammeTypeInformation:
    """The international programme type code of a programme service."""

    service_id: int
    is_dynamic: bool
    int_pty_code: int


def parse_programme_type(data, header=None) -> list[ProgrammeTypeInformation]:
    """Parse all programme type entries of a FIG 0/17."""
    _, reader = begin_fig0(data, header)
    result = []
    while reader:
        service_id = reader.read_u16()
        flags = reader.read_u8()
        pty_byte = reader.read_u8()
        result.append(
            ProgrammeTypeInformation(
                service_id=service_id,
                is_dynamic=bool(flags & 0x80),
                int_pty_code=pty_byte & 0x1F,
            )
        )
    return result