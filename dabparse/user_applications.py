"""FIG 0/13: user application information."""

from __future__ import annotations

from dataclasses import dataclass

from dabparse.fig0 import FigTruncatedError, begin_fig0


@dataclass(frozen=True)
class UserApplication:
    """One user application signalled for a service component."""

    user_app_type: int
    is_xpad_data: bool
    ca_applied: bool = False
    xpad_app_type: int = 0
    data_groups_used: bool = False
    data_service_component_type: int = 0
    ca_organization: int = 0
    user_app_data: bytes = b""


@dataclass(frozen=True)
class UserApplicationInformation:
    """User applications of the component identified by SId and SCIdS."""

    service_id: int
    is_programme_service: bool
    scids: int
    num_user_apps: int
    user_applications: tuple[UserApplication, ...] = ()


def _parse_user_application(reader, is_xpad: bool) -> UserApplication:
    first = reader.read_u8()
    second = reader.read_u8()
    app_type = first << 3 | (second & 0xE0) >> 5
    data_length = second & 0x1F

    ca_applied = False
    xpad_app_type = 0
    data_groups_used = False
    dscty = 0
    ca_org = 0
    if is_xpad and data_length >= 2:
        xpad_byte = reader.read_u8()
        ca_applied = bool(xpad_byte & 0x80)
        ca_org_present = bool(xpad_byte & 0x40)
        xpad_app_type = xpad_byte & 0x1F
        dg_byte = reader.read_u8()
        data_groups_used = not dg_byte & 0x80
        dscty = dg_byte & 0x3F
        data_length -= 2
        if ca_org_present:
            if data_length < 2:
                raise FigTruncatedError("user application data too short for CA organisation")
            ca_org = reader.read_u16()
            data_length -= 2

    return UserApplication(
        user_app_type=app_type,
        is_xpad_data=is_xpad,
        ca_applied=ca_applied,
        xpad_app_type=xpad_app_type,
        data_groups_used=data_groups_used,
        data_service_component_type=dscty,
        ca_organization=ca_org,
        user_app_data=reader.read_bytes(data_length),
    )


def parse_user_application_information(data, header=None) -> list[UserApplicationInformation]:
    """Parse all entries of a FIG 0/13."""
    header, reader = begin_fig0(data, header)
    is_xpad = not header.is_data_service
    result = []
    while reader:
        service_id = reader.read_service_id(header.is_data_service)
        info_byte = reader.read_u8()
        num_apps = info_byte & 0x0F
        apps = tuple(_parse_user_application(reader, is_xpad) for _ in range(num_apps))
        result.append(
            UserApplicationInformation(
                service_id=service_id,
                is_programme_service=not header.is_data_service,
                scids=(info_byte & 0xF0) >> 4,
                num_user_apps=num_apps,
                user_applications=apps,
            )
        )
    return result