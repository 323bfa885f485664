"""Bulk well import from CSV: DNA plate wells, PCR plate wells and index wells."""

import logging
import math
import re
from dataclasses import asdict, dataclass

import pandas as pd

from .errors import ValidationError
from .plate_utils import normalise_well_position

logger = logging.getLogger(__name__)

DEFAULT_WELL_TYPE = "SAMPLE"

# Plain decimal or exponent notation; no digit separators or named values
DECIMAL_REGEX = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


@dataclass(frozen=True)
class SampleWell:
    """A DNA plate well row."""

    position: str
    sample_id: str | None = None
    well_type: str = DEFAULT_WELL_TYPE
    dna_concentration_ng_ul: float | None = None
    notes: str | None = None


@dataclass(frozen=True)
class PcrWell:
    """A PCR plate well row."""

    position: str
    sample_label: str | None = None
    assay_type: str | None = None
    well_type: str = DEFAULT_WELL_TYPE
    notes: str | None = None


@dataclass(frozen=True)
class IndexWell:
    """An index plate well row. merged_sequence is i5 followed by i7."""

    position: str
    i5_name: str
    i5_sequence: str
    i7_name: str
    i7_sequence: str
    merged_sequence: str


# CSV header name for each record field
CSV_COLUMNS = {
    "position": "position",
    "sample_id": "sampleId",
    "well_type": "wellType",
    "dna_concentration_ng_ul": "dnaConcentrationNgUl",
    "notes": "notes",
    "sample_label": "sampleLabel",
    "assay_type": "assayType",
    "i5_name": "i5Name",
    "i5_sequence": "i5Sequence",
    "i7_name": "i7Name",
    "i7_sequence": "i7Sequence",
    "merged_sequence": "mergedSequence",
}


def _snake_case(name: str) -> str:
    return re.sub(r"(?<=[a-z0-9])([A-Z])", r"_\1", name).lower()


def _article(name: str) -> str:
    return "an" if name[0].lower() in "aeiou" else "a"


class _Sheet:
    """The header and data lines of one CSV upload."""

    def __init__(self, csv_text: str):
        # (line number, text) for non-blank lines; numbers count from 1
        lines = [
            (i, line.strip())
            for i, line in enumerate(re.split(r"\r?\n", csv_text), start=1)
            if line.strip()
        ]
        if len(lines) < 2:
            raise ValidationError("CSV must contain a header row and at least one data row")
        self.header = [h.strip() for h in lines[0][1].split(",")]
        self.rows = lines[1:]

    def column_index(self, name: str) -> int | None:
        """Index of *name* in the header, also accepting its snake_case spelling."""
        for candidate in (name, _snake_case(name)):
            if candidate in self.header:
                return self.header.index(candidate)
        return None

    def require_columns(self, names: list[str]) -> dict[str, int]:
        """Look up required columns in declaration order; the first missing one raises."""
        indices = {}
        for name in names:
            idx = self.column_index(name)
            if idx is None:
                raise ValidationError(f'CSV must contain {_article(name)} "{name}" column')
            indices[name] = idx
        return indices

    def records(self):
        """Yield (line number, normalised position, cell reader) per data row.

        Positions are normalised and checked for duplicates before the row
        is yielded.
        """
        pos_idx = self.require_columns(["position"])["position"]
        seen = set()
        for line_no, line in self.rows:
            cells = [c.strip() for c in line.split(",")]

            def cell(idx, _cells=cells):
                if idx is None or idx >= len(_cells):
                    return ""
                return _cells[idx]

            raw_pos = cell(pos_idx)
            position = normalise_well_position(raw_pos)
            if position is None:
                raise ValidationError(f'Invalid well position "{raw_pos}" on line {line_no}')
            if position in seen:
                raise ValidationError(f'Duplicate well position "{position}" on line {line_no}')
            seen.add(position)
            yield line_no, position, cell


def _optional(value: str) -> str | None:
    return value or None


def _well_type(value: str) -> str:
    return (value or DEFAULT_WELL_TYPE).upper()


def _concentration(value: str, line_no: int) -> float | None:
    if not value:
        return None
    conc = float(value) if DECIMAL_REGEX.fullmatch(value) else math.nan
    if not math.isfinite(conc):
        raise ValidationError(f'Invalid concentration value "{value}" on line {line_no}')
    return conc


def parse_bulk_well_csv(csv_text: str) -> list[SampleWell]:
    """Parse a DNA plate well sheet.

    Expected columns: position, sampleId, wellType, dnaConcentrationNgUl, notes.
    Only position is required.
    """
    sheet = _Sheet(csv_text)
    sample_idx = sheet.column_index("sampleId")
    type_idx = sheet.column_index("wellType")
    conc_idx = sheet.column_index("dnaConcentrationNgUl")
    notes_idx = sheet.column_index("notes")

    wells = []
    for line_no, position, cell in sheet.records():
        wells.append(SampleWell(
            position=position,
            sample_id=_optional(cell(sample_idx)),
            well_type=_well_type(cell(type_idx)),
            dna_concentration_ng_ul=_concentration(cell(conc_idx), line_no),
            notes=_optional(cell(notes_idx)),
        ))
    logger.debug("Parsed %d DNA plate wells", len(wells))
    return wells


def parse_bulk_pcr_well_csv(csv_text: str) -> list[PcrWell]:
    """Parse a PCR plate well sheet.

    Expected columns: position, sampleLabel, assayType, wellType, notes.
    Only position is required.
    """
    sheet = _Sheet(csv_text)
    label_idx = sheet.column_index("sampleLabel")
    assay_idx = sheet.column_index("assayType")
    type_idx = sheet.column_index("wellType")
    notes_idx = sheet.column_index("notes")

    wells = []
    for _, position, cell in sheet.records():
        wells.append(PcrWell(
            position=position,
            sample_label=_optional(cell(label_idx)),
            assay_type=_optional(cell(assay_idx)),
            well_type=_well_type(cell(type_idx)),
            notes=_optional(cell(notes_idx)),
        ))
    logger.debug("Parsed %d PCR plate wells", len(wells))
    return wells


INDEX_COLUMNS = ["i5Name", "i5Sequence", "i7Name", "i7Sequence"]


def parse_bulk_index_well_csv(csv_text: str) -> list[IndexWell]:
    """Parse an index plate sheet.

    Required columns: position, i5Name, i5Sequence, i7Name, i7Sequence.
    Every index cell must be filled in.
    """
    sheet = _Sheet(csv_text)
    indices = sheet.require_columns(["position"] + INDEX_COLUMNS)

    wells = []
    for line_no, position, cell in sheet.records():
        values = {}
        for name in INDEX_COLUMNS:
            value = cell(indices[name])
            if not value:
                raise ValidationError(f'Missing value for "{name}" on line {line_no}')
            values[name] = value
        wells.append(IndexWell(
            position=position,
            i5_name=values["i5Name"],
            i5_sequence=values["i5Sequence"],
            i7_name=values["i7Name"],
            i7_sequence=values["i7Sequence"],
            merged_sequence=values["i5Sequence"] + values["i7Sequence"],
        ))
    logger.debug("Parsed %d index wells", len(wells))
    return wells


def wells_to_frame(wells: list) -> pd.DataFrame:
    """Tabulate parsed wells, one row per well, columns named as in the CSV header."""
    df = pd.DataFrame([asdict(w) for w in wells])
    return df.rename(columns=CSV_COLUMNS)
