"""PCR plate set-up from DNA plates, index assignment and pool checks."""

import logging
from dataclasses import dataclass, field, replace

from .assays import PCR_ASSAY_INFO, POOLED_ACTIONS, PcrAssay, PcrResult, PoolingAction, WellType
from .errors import ValidationError
from .parser import IndexWell, SampleWell
from .plate_utils import well_position_to_index

logger = logging.getLogger(__name__)

# Every plate in a pool needs these controls
REQUIRED_CONTROLS = (WellType.NTC, WellType.MOCK_CONTROL)


@dataclass(frozen=True)
class PcrPlateWell:
    position: str
    sample_label: str | None = None
    assay_type: str | None = None
    well_type: str = WellType.SAMPLE.value
    index_i5_sequence: str | None = None
    index_i7_sequence: str | None = None
    merged_index_sequence: str | None = None
    pcr_result: str = PcrResult.PENDING.value
    pooling_action: str = PoolingAction.POOL_NORMAL.value
    notes: str | None = None

    @property
    def is_pooled(self) -> bool:
        return self.pooling_action in POOLED_ACTIONS


@dataclass
class PcrPlate:
    plate_identifier: str
    wells: list[PcrPlateWell] = field(default_factory=list)

    def pooled_wells(self) -> list[PcrPlateWell]:
        """Wells that go into the pool, in plate order."""
        return sorted(
            (w for w in self.wells if w.is_pooled),
            key=lambda w: well_position_to_index(w.position),
        )


@dataclass(frozen=True)
class CollisionWell:
    plate_identifier: str
    position: str
    sample_label: str | None


@dataclass(frozen=True)
class IndexCollision:
    merged_sequence: str
    wells: list[CollisionWell]


@dataclass(frozen=True)
class ControlWarning:
    plate_identifier: str
    missing_controls: list[str]
    message: str


def populate_pcr_from_dna(dna_wells: list[SampleWell], assay) -> list[PcrPlateWell]:
    """Lay out a PCR plate from a DNA plate, one PCR well per DNA well.

    Sample labels get the assay suffix ('SAMP-001' -> 'SAMP-001_16s'). Assays
    outside PcrAssay are used verbatim as the assay type with no suffix.
    """
    if not dna_wells:
        raise ValidationError("Source DNA plate has no wells")

    try:
        info = PCR_ASSAY_INFO[PcrAssay(assay)]
        suffix, assay_label = info.suffix, info.label
    except ValueError:
        suffix, assay_label = "", str(assay)

    pcr_wells = [
        PcrPlateWell(
            position=dw.position,
            sample_label=f"{dw.sample_id}{suffix}" if dw.sample_id else None,
            assay_type=assay_label,
            well_type=dw.well_type,
        )
        for dw in sorted(dna_wells, key=lambda w: well_position_to_index(w.position))
    ]
    logger.debug("Populated %d PCR wells for assay %s", len(pcr_wells), assay_label)
    return pcr_wells


def assign_indices(
    pcr_wells: list[PcrPlateWell],
    index_wells: list[IndexWell],
) -> tuple[list[PcrPlateWell], int]:
    """Copy index sequences onto PCR wells at the same positions.

    Returns:
        (wells, updated): the PCR wells in input order, and how many got an index.
    """
    if not index_wells:
        raise ValidationError("Index plate reference has no wells")

    by_position = {iw.position: iw for iw in index_wells}
    result = []
    updated = 0
    for well in pcr_wells:
        iw = by_position.get(well.position)
        if iw is None:
            result.append(well)
            continue
        result.append(replace(
            well,
            index_i5_sequence=iw.i5_sequence,
            index_i7_sequence=iw.i7_sequence,
            merged_index_sequence=iw.merged_sequence or f"{iw.i5_sequence}{iw.i7_sequence}",
        ))
        updated += 1
    return result, updated


def detect_index_collisions(plates: list[PcrPlate]) -> list[IndexCollision]:
    """Merged index sequences carried by more than one pooled well."""
    by_sequence: dict[str, list[CollisionWell]] = {}
    for plate in plates:
        for well in plate.wells:
            if not well.is_pooled or not well.merged_index_sequence:
                continue
            by_sequence.setdefault(well.merged_index_sequence, []).append(
                CollisionWell(plate.plate_identifier, well.position, well.sample_label)
            )

    collisions = [
        IndexCollision(seq, wells) for seq, wells in by_sequence.items() if len(wells) > 1
    ]
    if collisions:
        logger.warning("Found %d index collisions", len(collisions))
    return collisions


def validate_control_placement(plates: list[PcrPlate]) -> list[ControlWarning]:
    """One warning per plate that lacks an NTC or mock control well."""
    warnings = []
    for plate in plates:
        well_types = {w.well_type for w in plate.wells}
        missing = [c.value for c in REQUIRED_CONTROLS if c.value not in well_types]
        if missing:
            warnings.append(ControlWarning(
                plate_identifier=plate.plate_identifier,
                missing_controls=missing,
                message=f'PCR plate "{plate.plate_identifier}" is missing: {", ".join(missing)}',
            ))
    return warnings
