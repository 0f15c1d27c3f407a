"""Programme associated data (F-PAD / X-PAD) decoding."""

from __future__ import annotations

import logging
from enum import IntEnum
from typing import Union

from dabparse.fig0 import FigReader, FigTruncatedError
from dabparse.mot import MotDecoder, MotObject, crc_ccitt_check

_log = logging.getLogger(__name__)

XPAD_SIZE = (4, 6, 8, 12, 16, 24, 32, 48)

DYNAMIC_LABEL_USER_APPLICATION_TYPE = 0xFFFF
MOT_SLIDESHOW_USER_APPLICATION_TYPE = 0x002
MOT_BROADCAST_WEBSITE_USER_APPLICATION_TYPE = 0x003
EPG_USER_APPLICATION_TYPE = 0x007

_MOT_USER_APPLICATION_TYPES = frozenset({
    MOT_SLIDESHOW_USER_APPLICATION_TYPE,
    MOT_BROADCAST_WEBSITE_USER_APPLICATION_TYPE,
    EPG_USER_APPLICATION_TYPE,
})

_SHORT_XPAD_SIZE = 4
_NO_TYPE = 0xFF


class XPadIndicator(IntEnum):
    """X-PAD indicator of the F-PAD."""

    NO_XPAD = 0
    SHORT_XPAD = 1
    VARIABLE_XPAD = 2
    RFU = 3


class PadApplicationType(IntEnum):
    """X-PAD application types handled by the decoder."""

    END_MARKER = 0
    DATA_GROUP_LENGTH_INDICATOR = 1
    DLS_DATAGROUP_START = 2
    DLS_DATAGROUP_CONTINUATION = 3
    MOT_DATAGROUP_START = 12
    MOT_DATAGROUP_CONTINUATION = 13
    MOT_CA_DATAGROUP_START = 14
    MOT_CA_DATAGROUP_CONTINUATION = 15


def _app_type(value: int) -> Union[PadApplicationType, int]:
    try:
        return PadApplicationType(value)
    except ValueError:
        return value


def _is_user_defined(app_type: int) -> bool:
    return 4 <= app_type <= 11 or 16 <= app_type <= 31


class PadDecoder:
    """Splits PAD into X-PAD subfields and routes them to DLS and MOT decoding.

    User application decoders are duck typed: they carry a
    ``user_application_type`` attribute, accept
    ``application_data_input(data, app_type)`` and ``reset()``; MOT decoders
    additionally accept ``mot_application_data_input(mot_object)``.
    """

    def __init__(self):
        self._user_apps: dict[int, object] = {}
        self._user_app_decoders: dict[int, object] = {}
        self._current_data_group = bytearray()
        self._current_data_group_length = 0
        self._last_length = 0
        self._last_xpad_app_type = _NO_TYPE
        self._last_short_xpad_app_type = _NO_TYPE
        self._mot_decoder = MotDecoder()

    @property
    def current_data_group(self) -> bytes:
        """The MOT data group collected so far."""
        return bytes(self._current_data_group)

    @property
    def current_data_group_length(self) -> int:
        """The length announced by the last data group length indicator."""
        return self._current_data_group_length

    def add_user_application(self, app) -> None:
        """Register a user application by its ``xpad_app_type``."""
        self._user_apps.setdefault(app.xpad_app_type, app)

    def add_user_application_decoder(self, decoder) -> None:
        """Register a decoder; MOT based ones are also handed to MOT decoding."""
        if decoder is None:
            _log.warning("user application decoder is None")
            return
        app_type = decoder.user_application_type
        self._user_app_decoders.setdefault(app_type, decoder)
        if app_type in _MOT_USER_APPLICATION_TYPES:
            self._mot_decoder.add_userapplication_decoder(decoder)

    def reset(self) -> None:
        """Reset every registered user application decoder."""
        for decoder in self._user_app_decoders.values():
            decoder.reset()

    def pad_data_input(self, pad_data) -> list[MotObject]:
        """Decode one PAD field; return the MOT objects completed by it."""
        pad_data = bytes(pad_data)
        if not pad_data:
            return []
        if len(pad_data) < 2:
            raise FigTruncatedError("PAD needs at least the two F-PAD bytes")

        view = pad_data[::-1]
        ci_present = bool(view[0] & 0x02)
        if view[0] & 0x01:
            _log.debug("Z field set")
        fpad_type = (view[1] & 0xC0) >> 6
        indicator = XPadIndicator((view[1] & 0x30) >> 4)
        reader = FigReader(view[2:])

        if fpad_type != 0:
            return []

        if indicator == XPadIndicator.SHORT_XPAD:
            apps = self._short_xpad_apps(reader, ci_present)
        elif indicator == XPadIndicator.VARIABLE_XPAD:
            apps = self._variable_xpad_apps(reader, ci_present)
        else:
            apps = []

        completed = []
        for size, app_type in apps:
            subfield = reader.read_bytes(size)
            mot_object = self._subfield_input(subfield, app_type)
            if mot_object is not None:
                completed.append(mot_object)
        return completed

    def _short_xpad_apps(self, reader: FigReader, ci_present: bool):
        if ci_present:
            app_type = reader.read_u8() & 0x1F
            self._last_short_xpad_app_type = app_type
            return [(_SHORT_XPAD_SIZE - 1, _app_type(app_type))]
        app_type = (self._last_short_xpad_app_type + 1) & 0xFF
        return [(_SHORT_XPAD_SIZE, _app_type(app_type))]

    def _variable_xpad_apps(self, reader: FigReader, ci_present: bool):
        apps = []
        if ci_present:
            for _ in range(4):
                ci = reader.read_u8()
                length_index = (ci & 0xE0) >> 5
                app_type = ci & 0x1F
                if _is_user_defined(app_type) and app_type in self._user_apps:
                    _log.debug("user application found for X-PAD type %d", app_type)
                if app_type == 0:
                    break
                self._last_length = XPAD_SIZE[length_index]
                self._last_xpad_app_type = app_type
                apps.append((XPAD_SIZE[length_index], _app_type(app_type)))
        elif self._last_length > 0 or self._last_xpad_app_type != _NO_TYPE:
            if self._last_xpad_app_type % 2 == 0:
                self._last_xpad_app_type = (self._last_xpad_app_type + 1) & 0xFF
            apps.append((reader.remaining(), _app_type(self._last_xpad_app_type)))
        return apps

    def _subfield_input(self, subfield: bytes, app_type):
        if app_type == PadApplicationType.DATA_GROUP_LENGTH_INDICATOR:
            return self._length_indicator_input(subfield)

        if app_type == PadApplicationType.MOT_DATAGROUP_START:
            self._current_data_group.extend(subfield)
        elif app_type == PadApplicationType.MOT_DATAGROUP_CONTINUATION:
            remaining = max(0, self._current_data_group_length - len(self._current_data_group))
            self._current_data_group.extend(subfield[:remaining])
        elif app_type in (PadApplicationType.DLS_DATAGROUP_START,
                          PadApplicationType.DLS_DATAGROUP_CONTINUATION):
            decoder = self._user_app_decoders.get(DYNAMIC_LABEL_USER_APPLICATION_TYPE)
            if decoder is not None:
                decoder.application_data_input(subfield, app_type)
        return None

    def _length_indicator_input(self, subfield: bytes):
        if not crc_ccitt_check(subfield):
            _log.warning("data group length indicator CRC failed")
            self._current_data_group.clear()
            self._current_data_group_length = 0
            return None

        previous = bytes(self._current_data_group)
        expected = self._current_data_group_length
        self._current_data_group.clear()
        self._current_data_group_length = (subfield[0] & 0x3F) << 8 | subfield[1]

        if not previous:
            return None
        if len(previous) != expected:
            _log.info("MOT data group size mismatch: expected %d, got %d",
                      expected, len(previous))
        return self._mot_decoder.mot_data_input(previous)