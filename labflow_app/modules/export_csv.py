"""CSV exports for pooling robots and the sequencer."""

from datetime import date

import pandas as pd

from .assays import PoolingAction, WellType
from .config import settings
from .plate_utils import ALL_WELL_POSITIONS

OPENTRONS_COLUMNS = [
    "New Tip",
    "Source Labware",
    "Source Slot",
    "Source Well",
    "Source Aspiration Height",
    "Dest Labware",
    "Dest Slot",
    "Dest Well",
    "Dest Dispense Height",
    "Volume (in ul)",
]

ILLUMINA_DATA_COLUMNS = [
    "Sample_ID",
    "Sample_Name",
    "Sample_Plate",
    "Sample_Well",
    "I7_Index_ID",
    "index",
    "I5_Index_ID",
    "index2",
    "Sample_Project",
    "Description",
]


def generate_opentrons_csv(
    plates,
    source_slot: str | None = None,
    dest_slot: str | None = None,
    volume_ul: float | None = None,
) -> str:
    """Export the Opentrons pooling transfer list.

    One transfer per pooled well, plates in the given order and wells in
    plate order. POOL_DOUBLE wells get twice the volume. Destination wells
    cycle through the 96 positions of the pool plate.
    """
    source_slot = source_slot or settings.opentrons_source_slot
    dest_slot = dest_slot or settings.opentrons_dest_slot
    volume_ul = settings.opentrons_volume_ul if volume_ul is None else volume_ul

    rows = []
    for plate in plates:
        for well in plate.pooled_wells():
            vol = volume_ul * 2 if well.pooling_action == PoolingAction.POOL_DOUBLE else volume_ul
            rows.append([
                "Yes",
                plate.plate_identifier,
                source_slot,
                well.position,
                "1",
                "Destination",
                dest_slot,
                ALL_WELL_POSITIONS[len(rows) % len(ALL_WELL_POSITIONS)],
                "1",
                f"{vol:.15g}",
            ])

    return pd.DataFrame(rows, columns=OPENTRONS_COLUMNS).to_csv(index=False, lineterminator="\n")


def generate_illumina_sample_sheet(run_identifier: str, plates, run_date: date | None = None) -> str:
    """Export an Illumina (IEM v5) sample sheet for a sequencing run.

    The [Data] section lists pooled SAMPLE wells; control wells are left out.
    """
    run_date = run_date or date.today()
    lines = [
        "[Header]",
        "IEMFileVersion,5",
        f"Investigator Name,{settings.investigator_name}",
        f"Experiment Name,{run_identifier}",
        f"Date,{run_date.isoformat()}",
        "Workflow,GenerateFASTQ",
        "Application,FASTQ Only",
        "Chemistry,Amplicon",
        "",
        "[Reads]",
        str(settings.read_length),
        str(settings.read_length),
        "",
        "[Settings]",
        "ReverseComplement,0",
        "",
        "[Data]",
    ]

    rows = []
    for plate in plates:
        for well in plate.pooled_wells():
            if well.well_type != WellType.SAMPLE:
                continue
            rows.append([
                well.sample_label or f"{plate.plate_identifier}_{well.position}",
                well.sample_label or "",
                plate.plate_identifier,
                well.position,
                "",
                well.index_i7_sequence or "",
                "",
                well.index_i5_sequence or "",
                run_identifier,
                well.assay_type or "",
            ])

    data = pd.DataFrame(rows, columns=ILLUMINA_DATA_COLUMNS).to_csv(index=False, lineterminator="\n")
    return "\n".join(lines) + "\n" + data.rstrip("\n")
