"""FIG 0/21: frequency information."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from enum import IntEnum

from dabparse.fig0 import FigReader, begin_fig0


class FrequencyInformationType(IntEnum):
    """Kind of transmission a frequency list refers to."""

    FREQUENCY_INFORMATIONTYPE_UNKNOWN = 0
    DAB_ENSEMBLE = 1
    DRM = 2
    FM_RDS = 3
    AMSS = 4


class DabEnsembleAdjacent(IntEnum):
    """Control field qualification of a DAB ensemble frequency."""

    GEOGRAPHICALLY_ADJACENT_UNKNOWN = 0
    GEOGRAPHICALLY_ADJACENT_TRANSMISSION_MODE_NOT_SIGNALLED = 1
    GEOGRAPHICALLY_ADJACENT_TRANSMISSION_MODE_ONE = 2
    GEOGRAPHICALLY_NOT_ADJACENT_TRANSMISSION_MODE_NOT_SIGNALLED = 3
    GEOGRAPHICALLY_NOT_ADJACENT_TRANSMISSION_MODE_ONE = 4


_CONTROL_FIELD = {
    0: DabEnsembleAdjacent.GEOGRAPHICALLY_ADJACENT_TRANSMISSION_MODE_NOT_SIGNALLED,
    1: DabEnsembleAdjacent.GEOGRAPHICALLY_NOT_ADJACENT_TRANSMISSION_MODE_NOT_SIGNALLED,
    2: DabEnsembleAdjacent.GEOGRAPHICALLY_ADJACENT_TRANSMISSION_MODE_ONE,
    3: DabEnsembleAdjacent.GEOGRAPHICALLY_NOT_ADJACENT_TRANSMISSION_MODE_ONE,
}

_RM_DAB = 0
_RM_DRM = 6
_RM_FM_RDS = 8
_RM_AMSS = 14


@dataclass(eq=False)
class FrequencyInformation:
    """Frequencies (kHz, sorted) of one Id field / R&M entry."""

    frequencies_khz: list[int] = field(default_factory=list)
    id: int = 0
    frequency_information_type: FrequencyInformationType = (
        FrequencyInformationType.FREQUENCY_INFORMATIONTYPE_UNKNOWN
    )
    adjacent: DabEnsembleAdjacent = DabEnsembleAdjacent.GEOGRAPHICALLY_ADJACENT_UNKNOWN
    continuous_output: bool = False
    is_other_ensemble: bool = False
    is_change_event: bool = False

    def __eq__(self, other):
        """Same identity fields and every frequency of ``other`` present here."""
        if not isinstance(other, FrequencyInformation):
            return NotImplemented
        return (
            self.id == other.id
            and self.is_other_ensemble == other.is_other_ensemble
            and self.continuous_output == other.continuous_output
            and self.frequency_information_type == other.frequency_information_type
            and self.adjacent == other.adjacent
            and self.contains_all_freqs(other.frequencies_khz)
        )

    __hash__ = None

    def contains_all_freqs(self, other_freqs) -> bool:
        """True when every frequency in ``other_freqs`` is in this list."""
        return not Counter(other_freqs) - Counter(self.frequencies_khz)


def _parse_frequency_list(info: FrequencyInformation, range_modulation: int,
                          id_field: int, reader: FigReader) -> None:
    if range_modulation == _RM_DAB:
        info.frequency_information_type = FrequencyInformationType.DAB_ENSEMBLE
        info.id = id_field
        while reader:
            entry = reader.read_u24()
            control = (entry >> 19) & 0x1F
            info.adjacent = _CONTROL_FIELD.get(
                control, DabEnsembleAdjacent.GEOGRAPHICALLY_ADJACENT_UNKNOWN
            )
            info.frequencies_khz.append((entry & 0x07FFFF) * 16)
    elif range_modulation == _RM_FM_RDS:
        info.frequency_information_type = FrequencyInformationType.FM_RDS
        info.id = id_field
        while reader:
            info.frequencies_khz.append(reader.read_u8() * 100 + 87500)
    elif range_modulation in (_RM_DRM, _RM_AMSS):
        info.frequency_information_type = (
            FrequencyInformationType.DRM
            if range_modulation == _RM_DRM
            else FrequencyInformationType.AMSS
        )
        while reader:
            id_field_2 = reader.read_u8()
            value = reader.read_u16()
            frequency = value & 0x7FFF
            info.frequencies_khz.append(frequency * 10 if value & 0x8000 else frequency)
            info.id = id_field_2 << 16 | id_field
    # Other R&M codes are reserved; their frequency list is skipped.
    info.frequencies_khz.sort()


def parse_frequency_information(data, header=None) -> list[FrequencyInformation]:
    """Parse all frequency list entries of a FIG 0/21."""
    header, reader = begin_fig0(data, header)
    result = []
    while reader:
        fi_header = reader.read_u16()
        fi_list = FigReader(reader.read_bytes(fi_header & 0x1F))
        while fi_list:
            id_field = fi_list.read_u16()
            entry_byte = fi_list.read_u8()
            range_modulation = (entry_byte & 0xF0) >> 4
            list_length = entry_byte & 0x07
            freq_list = FigReader(fi_list.read_bytes(list_length))

            info = FrequencyInformation(
                continuous_output=bool(entry_byte & 0x08),
                is_other_ensemble=header.is_other_ensemble,
                is_change_event=list_length == 0,
            )
            _parse_frequency_list(info, range_modulation, id_field, freq_list)
            result.append(info)
    return result