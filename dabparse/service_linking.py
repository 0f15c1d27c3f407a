"""FIG 0/6: service linking information."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from enum import IntEnum

from dabparse.fig0 import begin_fig0


class IdListQualifier(IntEnum):
    """How the identifiers of an Id list are qualified."""

    DAB_SID = 0
    RDS_PI = 1
    RFU = 2
    DRM_AMSS_SID = 3


@dataclass(eq=False)
class ServiceLinkList:
    """Identifiers linked to a service, with their qualifier."""

    id_list_qualifier: IdListQualifier = IdListQualifier.DAB_SID
    id_list: list[int] = field(default_factory=list)

    def __eq__(self, other):
        """Same qualifier and every id of ``other`` present in this list."""
        if not isinstance(other, ServiceLinkList):
            return NotImplemented
        missing = Counter(other.id_list) - Counter(self.id_list)
        return self.id_list_qualifier == other.id_list_qualifier and not missing

    __hash__ = None

    def contains_id(self, other_id: int) -> bool:
        return other_id in self.id_list


@dataclass
class ServiceLinkingInformation:
    """One linkage set entry of FIG 0/6."""

    is_data_service: bool = False
    is_change_event: bool = False
    is_continuation: bool = False
    linkage_active: bool = False
    is_soft_link: bool = False
    is_ils: bool = False
    linkage_set_number: int = 0
    link_db_key: int = 0
    key_service_id: int = 0
    service_links: list[ServiceLinkList] = field(default_factory=list)

    def contains_service_link_list(self, link_list: ServiceLinkList) -> bool:
        return any(link == link_list for link in self.service_links)


def _read_id(reader, is_data_service: bool, is_ils: bool) -> int:
    if is_data_service:
        return reader.read_u32()
    if is_ils:
        return reader.read_u24()
    return reader.read_u16()


def parse_service_linking_information(data, header=None) -> list[ServiceLinkingInformation]:
    """Parse all linkage set entries of a FIG 0/6."""
    header, reader = begin_fig0(data, header)
    result = []
    while reader:
        first = reader.read_u8()
        id_list_flag = bool(first & 0x80)
        sh_flag = bool(first & 0x20)
        ils_flag = bool(first & 0x10)

        info = ServiceLinkingInformation(is_data_service=header.is_data_service)
        is_db_start = id_list_flag and not header.is_next_configuration
        if id_list_flag:
            info.is_continuation = header.is_next_configuration
        else:
            info.is_change_event = True

        info.linkage_active = bool(first & 0x40)
        info.is_soft_link = not sh_flag
        info.is_ils = ils_flag
        lsn = (first & 0x0F) << 8 | reader.read_u8()
        info.linkage_set_number = lsn

        link_list = ServiceLinkList()
        if id_list_flag:
            qualifier = reader.read_u8()
            link_list.id_list_qualifier = IdListQualifier((qualifier & 0x60) >> 5)
            for index in range(qualifier & 0x0F):
                ident = _read_id(reader, header.is_data_service, ils_flag)
                if index == 0 and is_db_start:
                    info.key_service_id = ident
                else:
                    link_list.id_list.append(ident)

        info.service_links.append(link_list)
        info.link_db_key = (
            int(header.is_other_ensemble) << 15
            | int(header.is_data_service) << 14
            | int(sh_flag) << 13
            | int(ils_flag) << 12
            | (lsn & 0x0FFF)
        )
        result.append(info)
    return result