"""FIG type 0 header handling, a bounds-checked byte reader and FIG 0/7."""

from __future__ import annotations

from dataclasses import dataclass


class FigTruncatedError(ValueError):
    """Raised when a FIG ends before a field it announces is complete."""


@dataclass(frozen=True)
class Fig0Header:
    """The first byte of a FIG type 0 data field."""

    is_next_configuration: bool = False
    is_other_ensemble: bool = False
    is_data_service: bool = False
    extension: int = 0

    @classmethod
    def from_byte(cls, value: int) -> Fig0Header:
        """Decode the C/N, OE, P/D flags and the extension number."""
        return cls(
            is_next_configuration=bool(value & 0x80),
            is_other_ensemble=bool(value & 0x40),
            is_data_service=bool(value & 0x20),
            extension=value & 0x1F,
        )

    @classmethod
    def from_fig(cls, data: bytes) -> Fig0Header:
        """Decode the header from the first byte of a FIG data field."""
        if not data:
            raise FigTruncatedError("FIG data is empty, no header byte present")
        return cls.from_byte(data[0])


class FigReader:
    """Sequential big-endian reader over FIG bytes that raises on truncation."""

    def __init__(self, data):
        self._data = bytes(data)
        self._pos = 0

    def __bool__(self) -> bool:
        return self._pos < len(self._data)

    def remaining(self) -> int:
        """Number of bytes not yet consumed."""
        return len(self._data) - self._pos

    def _require(self, count: int) -> None:
        if count > self.remaining():
            raise FigTruncatedError(
                f"need {count} byte(s) at offset {self._pos}, "
                f"only {self.remaining()} left"
            )

    def peek(self) -> int:
        """Return the next byte without consuming it."""
        self._require(1)
        return self._data[self._pos]

    def read_bytes(self, count: int) -> bytes:
        """Consume and return the next ``count`` bytes."""
        if count < 0:
            raise ValueError("count must not be negative")
        self._require(count)
        chunk = self._data[self._pos:self._pos + count]
        self._pos += count
        return chunk

    def _read_uint(self, size: int) -> int:
        return int.from_bytes(self.read_bytes(size), "big")

    def read_u8(self) -> int:
        return self._read_uint(1)

    def read_u16(self) -> int:
        return self._read_uint(2)

    def read_u24(self) -> int:
        return self._read_uint(3)

    def read_u32(self) -> int:
        return self._read_uint(4)

    def read_service_id(self, is_data_service: bool) -> int:
        """Read a 16-bit programme SId or a 32-bit data SId."""
        return self.read_u32() if is_data_service else self.read_u16()


def begin_fig0(data, header):
    """Resolve the header and return it with a reader positioned after it."""
    if header is None:
        header = Fig0Header.from_fig(data)
    return header, FigReader(bytes(data)[1:])


@dataclass(frozen=True)
class ConfigurationInformation:
    """FIG 0/7: number of services and configuration count."""

    services: int
    count: int


def parse_configuration_information(data, header=None) -> list[ConfigurationInformation]:
    """Parse FIG 0/7 configuration information entries."""
    _, reader = begin_fig0(data, header)
    entries = []
    while reader:
        first = reader.read_u8()
        second = reader.read_u8()
        entries.append(
            ConfigurationInformation(
                services=(first & 0xFC) >> 2,
                count=(first & 0x03) << 8 | second,
            )
        )
    return entries