# dabparse

`dabparse` decodes signalling carried by a DAB (Digital Audio Broadcasting)
ensemble: the FIG type 0 extensions of the Fast Information Channel, the
F-PAD / X-PAD data of an audio stream, and the MOT data groups carried in it.
It is pure Python and has no runtime dependencies.

## Installation

```
pip install dabparse
```

To run the test suite:

```
pip install "dabparse[test]"
pytest
```

## Modules

| Module | Content |
| --- | --- |
| `dabparse.fig0` | `Fig0Header`, `FigReader`, `FigTruncatedError`; FIG 0/7 configuration information (`parse_configuration_information`) |
| `dabparse.service_linking` | FIG 0/6 service linking information (`parse_service_linking_information`) |
| `dabparse.global_definition` | FIG 0/8 service component global definition (`parse_global_definitions`) |
| `dabparse.country` | FIG 0/9 country, LTO and international table (`parse_country_lto_table`) |
| `dabparse.date_time` | FIG 0/10 date and time (`parse_date_and_time`, `mjd_to_ymd`, `utc_timestamp`) |
| `dabparse.user_applications` | FIG 0/13 user application information (`parse_user_application_information`) |
| `dabparse.fec` | FIG 0/14 FEC sub-channel organisation (`parse_fec_schemes`) |
| `dabparse.programme_type` | FIG 0/17 programme type (`parse_programme_type`) |
| `dabparse.announcements` | FIG 0/18, 0/19, 0/25, 0/26 announcement support and switching |
| `dabparse.service_component_information` | FIG 0/20 service component information (`parse_service_component_information`) |
| `dabparse.frequency_information` | FIG 0/21 frequency information (`parse_frequency_information`) |
| `dabparse.other_ensemble` | FIG 0/24 OE services (`parse_other_ensemble_services`) |
| `dabparse.mot` | MOT data group reassembly (`MotDecoder`, `MotObject`, `crc_ccitt_check`) |
| `dabparse.pad` | F-PAD / X-PAD demultiplexing (`PadDecoder`) |

## FIG type 0

Every FIG 0 parser takes the FIG data field, starting with the byte that holds
the C/N, OE and P/D flags and the extension number. The header may be passed
explicitly; when it is left out it is decoded from that first byte.

```python
from dabparse.fig0 import Fig0Header
from dabparse.date_time import parse_date_and_time

data = bytes([...])                    # FIG 0/10 data field
header = Fig0Header.from_byte(data[0])
info = parse_date_and_time(data, header)
t = info.dab_time
print(t.year, t.month, t.day, t.hour, t.minute, t.unix_timestamp_seconds)
```

Most parsers return a list with one dataclass per entry in the FIG.
`parse_country_lto_table` and `parse_date_and_time` return a single result;
when a FIG holds several entries the last one is returned, and a FIG with no
entry raises `FigTruncatedError`.

The date helpers can be used on their own:

```python
from dabparse.date_time import mjd_to_ymd, utc_timestamp

mjd_to_ymd(58849)                      # (2020, 1, 1)
utc_timestamp(2020, 1, 1, 0, 0, 0)     # 1577836800
```

`decode_announcement_flags` in `dabparse.announcements` turns a 16-bit ASu/ASw
flag field into the announcement type numbers whose bits are set, highest first.

Data that ends in the middle of a field raises
`dabparse.fig0.FigTruncatedError` (a `ValueError`).

## PAD and MOT

`PadDecoder.pad_data_input(pad_data)` takes the PAD bytes of one audio frame at
a time, in transmission order. It reads the F-PAD, splits short or variable
X-PAD into sub-fields by application type, and:

- sends dynamic label sub-fields to the decoder registered for that user
  application type, through its `application_data_input(data, app_type)`;
- collects MOT data group sub-fields, checked against the data group length
  indicator, and passes each finished data group to an internal `MotDecoder`.

It returns the list of `MotObject`s whose body was completed by that call.

User application decoders are plain objects: they need a
`user_application_type` attribute and a `reset()` method; decoders for MOT
slideshow, broadcast website or EPG also need
`mot_application_data_input(mot_object)`. Register them with
`PadDecoder.add_user_application_decoder`; `PadDecoder.reset()` resets them all.

`MotDecoder.mot_data_input(datagroup)` handles one MSC data group. MOT headers
are stored by transport id; body segments are appended in order, and a gap in
segment numbers drops the object. When a body is complete the `MotObject` is
returned, and if its content type is an image it is also handed to every
registered slideshow decoder. `crc_ccitt_check(data)` checks the CRC-CCITT in
the last two bytes of a buffer.

## What it does not do

`dabparse` works on FIG data fields and PAD bytes that have already been taken
out of the transmission. It does not read from a tuner, split or CRC-check the
Fast Information Blocks, decode FIG types other than 0 (labels among them),
decode audio, or turn dynamic label data into text; it has no command-line
tool.