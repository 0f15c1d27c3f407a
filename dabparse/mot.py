"""MOT data group decoding: headers, segmented bodies and hand-off to decoders."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Optional, Union

from dabparse.fig0 import FigReader

_log = logging.getLogger(__name__)

SLIDESHOW_USER_APPLICATION_TYPE = 0x002


class MotDatagroupType(IntEnum):
    """MSC data group types relevant to MOT."""

    GENERAL_DATA = 0
    CA_MESSAGES = 1
    GENERAL_DATA_CA = 2
    MOT_HEADER = 3
    MOT_BODY_UNSCRAMBLED = 4
    MOT_BODY_SCRAMBLED = 5
    MOT_DIRECTORY_UNCOMPRESSED = 6
    MOT_DIRECTORY_COMPRESSED = 7


class MotContentType(IntEnum):
    """MOT content type of an object."""

    GENERAL_DATA = 0
    TEXT = 1
    IMAGE = 2
    AUDIO = 3
    VIDEO = 4
    MOT_TRANSPORT = 5
    SYSTEM = 6
    APPLICATION = 7
    PROPRIETARY = 0x3F


def _as_enum(enum_cls, value: int):
    try:
        return enum_cls(value)
    except ValueError:
        return value


@dataclass
class MotObject:
    """A MOT object being assembled from its header and body segments."""

    body_size: int = 0
    header_size: int = 0
    content_type: Union[MotContentType, int] = MotContentType.GENERAL_DATA
    content_subtype: int = 0
    header_params: dict[int, bytes] = field(default_factory=dict)
    body_data: bytearray = field(default_factory=bytearray)
    previous_segment_number: int = -1

    @property
    def is_complete(self) -> bool:
        return len(self.body_data) == self.body_size


def crc_ccitt_check(data) -> bool:
    """Check the CRC-CCITT carried in the last two bytes of ``data``."""
    data = bytes(data)
    if len(data) < 2:
        return False
    crc = 0xFFFF
    for byte in data[:-2]:
        crc ^= byte << 8
        for _ in range(8):
            crc = (crc << 1) ^ 0x1021 if crc & 0x8000 else crc << 1
            crc &= 0xFFFF
    return crc ^ 0xFFFF == int.from_bytes(data[-2:], "big")


def _extension_parameter_length(indicator: int, reader: FigReader) -> int:
    if indicator == 0:
        return 0
    if indicator == 1:
        return 1
    if indicator == 2:
        return 4
    if reader.peek() & 0x80:
        return reader.read_u16() & 0x7FFF
    return reader.read_u8() & 0x7F


class MotDecoder:
    """Collects MOT headers and bodies keyed by transport id."""

    def __init__(self):
        self._decoders = []
        self._objects: dict[int, MotObject] = {}

    def add_userapplication_decoder(self, decoder) -> None:
        """Register a user application decoder to receive complete objects.

        The decoder needs a ``user_application_type`` attribute and a
        ``mot_application_data_input(mot_object)`` method.
        """
        self._decoders.append(decoder)

    def mot_data_input(self, datagroup) -> Optional[MotObject]:
        """Process one MSC data group; return the object if its body completed."""
        datagroup = bytes(datagroup)
        reader = FigReader(datagroup)

        first = reader.read_u8()
        extension_flag = bool(first & 0x80)
        crc_flag = bool(first & 0x40)
        if crc_flag and not crc_ccitt_check(datagroup):
            _log.warning("MSC data group CRC failed")
            return None
        segment_flag = bool(first & 0x20)
        user_access_flag = bool(first & 0x10)
        datagroup_type = _as_enum(MotDatagroupType, first & 0x0F)

        reader.read_u8()  # continuity and repetition index
        if extension_flag:
            reader.read_bytes(2)

        is_last = False
        segment_number = 0xFFFF
        if segment_flag:
            value = reader.read_u16()
            is_last = bool(value & 0x8000)
            segment_number = value & 0x7FFF

        transport_id = 0xFFFF
        if user_access_flag:
            access = reader.read_u8()
            length_indicator = access & 0x0F
            if access & 0x10:
                transport_id = reader.read_u16()
            reader.read_bytes(max(0, length_indicator - 2))  # end user address

        segment_size = reader.read_u16() & 0x1FFF

        if datagroup_type == MotDatagroupType.MOT_HEADER:
            self._header_input(reader, transport_id, crc_flag)
            return None
        if datagroup_type == MotDatagroupType.MOT_BODY_UNSCRAMBLED:
            return self._body_input(reader, transport_id, segment_number,
                                    segment_size, is_last)
        _log.info("unsupported MOT data group type %s", datagroup_type)
        return None

    def _header_input(self, reader: FigReader, transport_id: int, crc_flag: bool) -> None:
        core = int.from_bytes(reader.read_bytes(7), "big")
        mot_object = MotObject(
            body_size=core >> 28,
            header_size=(core >> 15) & 0x1FFF,
            content_type=_as_enum(MotContentType, (core >> 9) & 0x3F),
            content_subtype=core & 0x1FF,
        )
        trailer = 2 if crc_flag else 0
        while reader.remaining() > trailer:
            pli_byte = reader.read_u8()
            param_id = pli_byte & 0x3F
            length = _extension_parameter_length((pli_byte & 0xC0) >> 6, reader)
            mot_object.header_params.setdefault(param_id, reader.read_bytes(length))
        self._objects.setdefault(transport_id, mot_object)

    def _body_input(self, reader: FigReader, transport_id: int, segment_number: int,
                    segment_size: int, is_last: bool) -> Optional[MotObject]:
        mot_object = self._objects.get(transport_id)
        if mot_object is None:
            return None
        if mot_object.previous_segment_number + 1 != segment_number:
            _log.info("MOT segment number interruption: %d -> %d",
                      mot_object.previous_segment_number, segment_number)
            del self._objects[transport_id]
            return None

        mot_object.previous_segment_number = segment_number
        mot_object.body_data.extend(reader.read_bytes(segment_size))

        completed = None
        if mot_object.is_complete:
            completed = mot_object
            if mot_object.content_type == MotContentType.IMAGE:
                for decoder in self._decoders:
                    if decoder.user_application_type == SLIDESHOW_USER_APPLICATION_TYPE:
                        decoder.mot_application_data_input(mot_object)
            else:
                _log.info("unhandled MOT content type %s", mot_object.content_type)

        if is_last:
            self._objects.pop(transport_id, None)
        return completed