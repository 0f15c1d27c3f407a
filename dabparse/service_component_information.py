"""FIG 0/20: service component information."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional

from dabparse.fig0 import begin_fig0


class ChangeType(IntEnum):
    """Future change announced for a service element."""

    REMAINS_WITH_NEW_SID = 0
    ADDED_TO_ENSEMBLE = 1
    REMOVED_FROM_ENSEMBLE = 2
    REMOVED_FROM_ALL_ENSEMBLES = 3


class PartTime(IntEnum):
    """Whether a service element is on air continuously or part-time."""

    ON_OFF_AIR_CONTINUOUSLY = 0
    ON_OFF_AIR_CYCLE = 1


@dataclass(frozen=True)
class ServiceComponentInformation:
    """One service element entry of FIG 0/20.

    The component description and the change time are only present when the
    SC flag was set; the transfer identifiers only when their flags were set.
    """

    service_id: int
    scids: int
    change_type: ChangeType
    part_time: PartTime
    has_sc_information: bool = False
    ca_applied: bool = False
    is_data_component: bool = False
    sc_type: Optional[int] = None
    date: Optional[int] = None
    hour: Optional[int] = None
    minute: Optional[int] = None
    second: Optional[int] = None
    transferred_service_id: Optional[int] = None
    transferred_ensemble_id: Optional[int] = None


def parse_service_component_information(data, header=None) -> list[ServiceComponentInformation]:
    """Parse all service element entries of a FIG 0/20."""
    header, reader = begin_fig0(data, header)
    result = []
    while reader:
        service_id = reader.read_service_id(header.is_data_service)
        flags = reader.read_u8()
        scids = (flags & 0xF0) >> 4
        change_type = ChangeType((flags & 0x0C) >> 2)
        part_time = PartTime((flags & 0x02) >> 1)
        sc_flag = bool(flags & 0x01)

        if not sc_flag:
            result.append(
                ServiceComponentInformation(
                    service_id=service_id,
                    scids=scids,
                    change_type=change_type,
                    part_time=part_time,
                )
            )
            continue

        description = reader.read_u8()
        b0, b1, b2 = reader.read_bytes(3)
        sid_flag = bool(b2 & 0x02)
        eid_flag = bool(b2 & 0x01)

        transferred_sid = None
        transferred_eid = None
        if sid_flag:
            transferred_sid = reader.read_service_id(header.is_data_service)
            if eid_flag:
                transferred_eid = reader.read_u16()

        result.append(
            ServiceComponentInformation(
                service_id=service_id,
                scids=scids,
                change_type=change_type,
                part_time=part_time,
                has_sc_information=True,
                ca_applied=bool(description & 0x80),
                is_data_component=bool(description & 0x40),
                sc_type=description & 0x3F,
                date=(b0 & 0xF8) >> 3,
                hour=(b0 & 0x07) << 2 | (b1 & 0xC0) >> 6,
                minute=b1 & 0x3F,
                second=(b2 & 0xFC) >> 2,
                transferred_service_id=transferred_sid,
                transferred_ensemble_id=transferred_eid,
            )
        )
    return result