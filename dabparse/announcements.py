"""FIG 0/18, 0/19, 0/25 and 0/26: announcement support and switching."""

from __future__ import annotations

from dataclasses import dataclass

from dabparse.fig0 import begin_fig0


def decode_announcement_flags(flags: int) -> tuple[int, ...]:
    """Announcement types whose bit is set, from bit 15 down to bit 0."""
    return tuple(bit for bit in range(15, -1, -1) if flags >> bit & 0x01)


@dataclass(frozen=True)
class AnnouncementSupport:
    """FIG 0/18: announcements a service may be interrupted by."""

    service_id: int = 0
    supported_announcements: tuple[int, ...] = ()
    cluster_ids: tuple[int, ...] = ()


@dataclass(frozen=True)
class AnnouncementSwitching:
    """FIG 0/19: an announcement currently carried in the tuned ensemble."""

    cluster_id: int = 0
    announcements_switched: tuple[int, ...] = ()
    is_newly_introduced: bool = False
    subchannel_id: int = 0


@dataclass(frozen=True)
class OeAnnouncementTarget:
    """An other-ensemble cluster and the ensemble that carries it."""

    cluster_id: int
    ensemble_id: int


@dataclass(frozen=True)
class OeAnnouncementSupport:
    """FIG 0/25: announcements from other ensembles a service may take."""

    service_id: int = 0
    supported_announcements: tuple[int, ...] = ()
    targets: tuple[OeAnnouncementTarget, ...] = ()


@dataclass(frozen=True)
class OeAnnouncementSwitching:
    """FIG 0/26: an announcement carried in another ensemble."""

    cluster_id: int = 0
    announcements_switched: tuple[int, ...] = ()
    is_newly_introduced: bool = False
    scids: int = 0
    target_service_id: int = 0


def parse_announcement_support(data, header=None) -> list[AnnouncementSupport]:
    """Parse all entries of a FIG 0/18."""
    _, reader = begin_fig0(data, header)
    result = []
    while reader:
        service_id = reader.read_u16()
        flags = reader.read_u16()
        num_clusters = reader.read_u8() & 0x07
        cluster_ids = tuple(reader.read_bytes(num_clusters))
        result.append(
            AnnouncementSupport(
                service_id=service_id,
                supported_announcements=decode_announcement_flags(flags),
                cluster_ids=cluster_ids,
            )
        )
    return result


def parse_announcement_switching(data, header=None) -> list[AnnouncementSwitching]:
    """Parse all entries of a FIG 0/19."""
    _, reader = begin_fig0(data, header)
    result = []
    while reader:
        cluster_id = reader.read_u8()
        flags = reader.read_u16()
        last = reader.read_u8()
        result.append(
            AnnouncementSwitching(
                cluster_id=cluster_id,
                announcements_switched=decode_announcement_flags(flags),
                is_newly_introduced=bool(last & 0x80),
                subchannel_id=last & 0x3F,
            )
        )
    return result


def parse_oe_announcement_support(data, header=None) -> list[OeAnnouncementSupport]:
    """Parse all entries of a FIG 0/25."""
    _, reader = begin_fig0(data, header)
    result = []
    while reader:
        service_id = reader.read_u16()
        flags = reader.read_u16()
        num_targets = reader.read_u8() & 0x03
        targets = []
        for _ in range(num_targets):
            cluster_id = reader.read_u8()
            targets.append(OeAnnouncementTarget(cluster_id=cluster_id, ensemble_id=reader.read_u16()))
        result.append(
            OeAnnouncementSupport(
                service_id=service_id,
                supported_announcements=decode_announcement_flags(flags),
                targets=tuple(targets),
            )
        )
    return result


def parse_oe_announcement_switching(data, header=None) -> list[OeAnnouncementSwitching]:
    """Parse all entries of a FIG 0/26."""
    _, reader = begin_fig0(data, header)
    result = []
    while reader:
        cluster_id = reader.read_u8()
        flags = reader.read_u16()
        info = reader.read_u8()
        target_sid = reader.read_u16()
        result.append(
            OeAnnouncementSwitching(
                cluster_id=cluster_id,
                announcements_switched=decode_announcement_flags(flags),
                is_newly_introduced=bool(info & 0x80),
                scids=info & 0x0F,
                target_service_id=target_sid,
            )
        )
    return result