"""PCR assay vocabulary and the well-level enums shared by the plate workflows."""

from dataclasses import dataclass
from enum import Enum


class PcrAssay(str, Enum):
    ASSAY_16S = "ASSAY_16S"
    ASSAY_EUK2 = "ASSAY_EUK2"
    ASSAY_ITS = "ASSAY_ITS"
    ASSAY_COI = "ASSAY_COI"


@dataclass(frozen=True)
class AssayInfo:
    value: PcrAssay
    label: str
    display_name: str
    suffix: str  # appended to sample IDs to form PCR sample labels
    target_gene: str


PCR_ASSAY_INFO = {
    PcrAssay.ASSAY_16S: AssayInfo(PcrAssay.ASSAY_16S, "16S", "16S rRNA", "_16s", "16S ribosomal RNA"),
    PcrAssay.ASSAY_EUK2: AssayInfo(PcrAssay.ASSAY_EUK2, "EUK2", "Eukaryotic 18S", "_EUK2", "18S ribosomal RNA (eukaryotic)"),
    PcrAssay.ASSAY_ITS: AssayInfo(PcrAssay.ASSAY_ITS, "ITS", "ITS", "_ITS", "Internal Transcribed Spacer"),
    PcrAssay.ASSAY_COI: AssayInfo(PcrAssay.ASSAY_COI, "COI", "COI", "_COI", "Cytochrome c Oxidase I"),
}

ASSAY_BY_SUFFIX = {info.suffix: info.value for info in PCR_ASSAY_INFO.values()}


def get_assay_label(assay) -> str:
    """Short label for an assay, e.g. '16S'."""
    return PCR_ASSAY_INFO[PcrAssay(assay)].label


def get_assay_suffix(assay) -> str:
    """Sample-label suffix for an assay, e.g. '_16s'."""
    return PCR_ASSAY_INFO[PcrAssay(assay)].suffix


class PcrResult(str, Enum):
    PENDING = "PCR_PENDING"
    PASS = "PASS"
    FAIL = "FAIL"
    BORDERLINE = "BORDERLINE"


class PoolingAction(str, Enum):
    POOL_NORMAL = "POOL_NORMAL"
    POOL_DOUBLE = "POOL_DOUBLE"
    DO_NOT_POOL = "DO_NOT_POOL"
    SKIP = "POOL_SKIP"


# Wells with these actions go into the pool
POOLED_ACTIONS = (PoolingAction.POOL_NORMAL, PoolingAction.POOL_DOUBLE)


class WellType(str, Enum):
    SAMPLE = "SAMPLE"
    MOCK_CONTROL = "MOCK_CONTROL"
    EXTRACTION_CONTROL = "EXTRACTION_CONTROL"
    NTC = "NTC"
    POSITIVE_CONTROL = "POSITIVE_CONTROL"
    EMPTY = "EMPTY"


class ExtractionMethod(str, Enum):
    AUTOMATED = "AUTOMATED"
    MANUAL = "MANUAL"
    OTHER = "OTHER"


SAMPLE_LABEL_SUFFIXES = [
    {"suffix": "_16s", "description": "16S rRNA assay", "type": "assay"},
    {"suffix": "_EUK2", "description": "Eukaryotic 18S assay", "type": "assay"},
    {"suffix": "_ITS", "description": "ITS assay", "type": "assay"},
    {"suffix": "_COI", "description": "COI assay", "type": "assay"},
    {"suffix": ".d2", "description": "Dilution (1:2)", "type": "dilution"},
    {"suffix": ".d5", "description": "Dilution (1:5)", "type": "dilution"},
    {"suffix": ".d10", "description": "Dilution (1:10)", "type": "dilution"},
    {"suffix": ".r", "description": "Rerun", "type": "rerun"},
    {"suffix": "_2", "description": "Repeat (2nd attempt)", "type": "repeat"},
    {"suffix": "_3", "description": "Repeat (3rd attempt)", "type": "repeat"},
]
