"""FIG 0/8: service component global definition."""

from __future__ import annotations

from dataclasses import dataclass

from dabparse.fig0 import begin_fig0


@dataclass(frozen=True)
class ServiceComponentGlobalDefinition:
    """Links a service component (SId, SCIdS) to a sub-channel or SCId."""

    is_programme_service: bool
    service_id: int
    scids: int
    is_short_form: bool
    subchannel_id: int = 0xFF
    service_component_id: int = 0xFFFF


def parse_global_definitions(data, header=None) -> list[ServiceComponentGlobalDefinition]:
    """Parse all service component global definitions of a FIG 0/8."""
    header, reader = begin_fig0(data, header)
    result = []
    while reader:
        service_id = reader.read_service_id(header.is_data_service)
        flags = reader.read_u8()
        extension_present = bool(flags & 0x80)
        scids = flags & 0x0F

        is_short_form = not reader.peek() & 0x80
        subchannel_id = 0xFF
        service_component_id = 0xFFFF
        if is_short_form:
            subchannel_id = reader.read_u8() & 0x3F
        else:
            service_component_id = reader.read_u16() & 0x0FFF

        if extension_present:
            reader.read_u8()

        result.append(
            ServiceComponentGlobalDefinition(
                is_programme_service=not header.is_data_service,
                service_id=service_id,
                scids=scids,
                is_short_form=is_short_form,
                subchannel_id=subchannel_id,
                service_component_id=service_component_id,
            )
        )
    return result