"""FIG 0/9: country, local time offset and international table."""

from __future__ import annotations

from dataclasses import dataclass

from dabparse.fig0 import FigTruncatedError, begin_fig0


@dataclass(frozen=True)
class ExtendedCountryField:
    """An ECC that applies to the listed programme services."""

    ecc: int
    service_ids: tuple[int, ...] = ()


@dataclass(frozen=True)
class CountryLtoInternationalTable:
    """Ensemble local time offset, ECC and international table id."""

    local_time_offset: int
    ensemble_ecc: int
    international_table_id: int
    extended_fields: tuple[ExtendedCountryField, ...] = ()

    @property
    def local_time_offset_minutes(self) -> int:
        """The offset in minutes; the field counts half hours."""
        return self.local_time_offset * 30


def parse_country_lto_table(data, header=None) -> CountryLtoInternationalTable:
    """Parse a FIG 0/9; when several entries are present the last one wins."""
    _, reader = begin_fig0(data, header)
    table = None
    while reader:
        first = reader.read_u8()
        extended = bool(first & 0x80)
        lto = first & 0x1F
        if first & 0x20:
            lto = -lto
        ensemble_ecc = reader.read_u8()
        table_id = reader.read_u8()

        fields = []
        if extended:
            while reader:
                count_byte = reader.read_u8()
                num_services = (count_byte & 0xC0) >> 6
                ecc = reader.read_u8()
                service_ids = tuple(reader.read_u16() for _ in range(num_services))
                fields.append(ExtendedCountryField(ecc=ecc, service_ids=service_ids))

        table = CountryLtoInternationalTable(
            local_time_offset=lto,
            ensemble_ecc=ensemble_ecc,
            international_table_id=table_id,
            extended_fields=tuple(fields),
        )

    if table is None:
        raise FigTruncatedError("FIG 0/9 carries no country/LTO entry")
    return table