"""FIG 0/24: other ensemble services."""

from __future__ import annotations

from dataclasses import dataclass

from dabparse.fig0 import begin_fig0


@dataclass(frozen=True)
class OtherEnsembleServiceInformation:
    """The ensembles (by EId, sorted) that carry a service.

    ``is_cei`` marks a change event indication, signalled by an empty EId list.
    """

    service_id: int = 0
    ca_id: int = 0
    ensemble_ids: tuple[int, ...] = ()
    is_other_ensemble: bool = False
    is_cei: bool = False


def parse_other_ensemble_services(data, header=None) -> list[OtherEnsembleServiceInformation]:
    """Parse all service entries of a FIG 0/24."""
    header, reader = begin_fig0(data, header)
    result = []
    while reader:
        service_id = reader.read_service_id(header.is_data_service)
        info_byte = reader.read_u8()
        num_eids = info_byte & 0x0F
        ensemble_ids = sorted(reader.read_u16() for _ in range(num_eids))
        result.append(
            OtherEnsembleServiceInformation(
                service_id=service_id,
                ca_id=(info_byte & 0x70) >> 4,
                ensemble_ids=tuple(ensemble_ids),
                is_other_ensemble=header.is_other_ensemble,
                is_cei=num_eids == 0,
            )
        )
    return result