"""Workflow status tables for samples, sequencing runs and PCR plates.

Each workflow is a fixed adjacency table: status -> statuses reachable in one
step. Terminal statuses map to an empty tuple.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from .errors import ConflictError, ValidationError

logger = logging.getLogger(__name__)


class WorkflowKind(str, Enum):
    SAMPLE = "Sample"
    SEQUENCING_RUN = "SequencingRun"
    PCR_PLATE = "PCRPlate"


class SampleStatus(str, Enum):
    REGISTERED = "REGISTERED"
    RECEIVED = "RECEIVED"
    IN_STORAGE = "IN_STORAGE"
    IN_PROGRESS = "IN_PROGRESS"
    TESTING_COMPLETE = "TESTING_COMPLETE"
    APPROVED = "APPROVED"
    REPORTED = "REPORTED"
    ON_HOLD = "ON_HOLD"
    DISPOSED = "DISPOSED"
    REJECTED = "REJECTED"
    CANCELLED = "CANCELLED"


class SequencingRunStatus(str, Enum):
    SETUP = "SETUP"
    DNA_EXTRACTED = "DNA_EXTRACTED"
    PCR_IN_PROGRESS = "PCR_IN_PROGRESS"
    POOLED = "POOLED"
    SUBMITTED = "SUBMITTED"
    SEQUENCED = "SEQUENCED"


class PcrPlateStatus(str, Enum):
    SETUP = "PLATE_SETUP"
    PCR_COMPLETE = "PCR_COMPLETE"
    GEL_CHECKED = "GEL_CHECKED"
    POOLING_ASSIGNED = "POOLING_ASSIGNED"
    DONE = "PLATE_DONE"


S = SampleStatus
R = SequencingRunStatus
P = PcrPlateStatus

SAMPLE_STATUS_TRANSITIONS = {
    S.REGISTERED: (S.RECEIVED, S.REJECTED, S.CANCELLED),
    S.RECEIVED: (S.IN_STORAGE, S.IN_PROGRESS, S.ON_HOLD, S.REJECTED, S.CANCELLED),
    S.IN_STORAGE: (S.IN_PROGRESS, S.ON_HOLD, S.DISPOSED, S.CANCELLED),
    S.IN_PROGRESS: (S.TESTING_COMPLETE, S.ON_HOLD, S.CANCELLED),
    S.TESTING_COMPLETE: (S.APPROVED, S.IN_PROGRESS, S.ON_HOLD),
    S.APPROVED: (S.REPORTED, S.ON_HOLD),
    S.REPORTED: (S.DISPOSED,),
    S.ON_HOLD: (S.RECEIVED, S.IN_STORAGE, S.IN_PROGRESS, S.TESTING_COMPLETE, S.CANCELLED),
    S.DISPOSED: (),
    S.REJECTED: (),
    S.CANCELLED: (),
}

SEQUENCING_RUN_TRANSITIONS = {
    R.SETUP: (R.DNA_EXTRACTED,),
    R.DNA_EXTRACTED: (R.PCR_IN_PROGRESS,),
    R.PCR_IN_PROGRESS: (R.POOLED,),
    R.POOLED: (R.SUBMITTED,),
    R.SUBMITTED: (R.SEQUENCED,),
    R.SEQUENCED: (),
}

PCR_PLATE_TRANSITIONS = {
    P.SETUP: (P.PCR_COMPLETE,),
    P.PCR_COMPLETE: (P.GEL_CHECKED,),
    P.GEL_CHECKED: (P.POOLING_ASSIGNED,),
    P.POOLING_ASSIGNED: (P.DONE,),
    P.DONE: (),
}

TRANSITIONS = {
    WorkflowKind.SAMPLE: SAMPLE_STATUS_TRANSITIONS,
    WorkflowKind.SEQUENCING_RUN: SEQUENCING_RUN_TRANSITIONS,
    WorkflowKind.PCR_PLATE: PCR_PLATE_TRANSITIONS,
}

# Entity name used in error messages
ENTITY_NAMES = {
    WorkflowKind.SAMPLE: "sample",
    WorkflowKind.SEQUENCING_RUN: "sequencing run",
    WorkflowKind.PCR_PLATE: "PCR plate",
}


@dataclass(frozen=True)
class StatusInfo:
    label: str
    description: str
    is_final: bool = False


STATUS_INFO = {
    WorkflowKind.SAMPLE: {
        S.REGISTERED: StatusInfo("Registered", "Sample has been logged into the system but not yet physically received"),
        S.RECEIVED: StatusInfo("Received", "Sample has been physically received and inspected"),
        S.IN_STORAGE: StatusInfo("In Storage", "Sample has been placed in a designated storage location"),
        S.IN_PROGRESS: StatusInfo("In Progress", "Testing is actively being performed on the sample"),
        S.TESTING_COMPLETE: StatusInfo("Testing Complete", "All assigned tests have been completed"),
        S.APPROVED: StatusInfo("Approved", "All results have been reviewed and approved"),
        S.REPORTED: StatusInfo("Reported", "Results have been reported to the client"),
        S.ON_HOLD: StatusInfo("On Hold", "Sample processing is temporarily paused"),
        S.DISPOSED: StatusInfo("Disposed", "Sample has been disposed of according to protocol", True),
        S.REJECTED: StatusInfo("Rejected", "Sample was rejected due to quality or compliance issues", True),
        S.CANCELLED: StatusInfo("Cancelled", "Sample processing was cancelled", True),
    },
    WorkflowKind.SEQUENCING_RUN: {
        R.SETUP: StatusInfo("Setup", "Run is being configured; plates and samples are being defined"),
        R.DNA_EXTRACTED: StatusInfo("DNA Extracted", "DNA extraction is complete for all plates in this run"),
        R.PCR_IN_PROGRESS: StatusInfo("PCR In Progress", "PCR amplification and gel checking are underway"),
        R.POOLED: StatusInfo("Pooled", "PCR products have been pooled for sequencing"),
        R.SUBMITTED: StatusInfo("Submitted", "Pool has been submitted for sequencing"),
        R.SEQUENCED: StatusInfo("Sequenced", "Sequencing is complete and data has been received", True),
    },
    WorkflowKind.PCR_PLATE: {
        P.SETUP: StatusInfo("Setup", "PCR plate is being prepared; wells are being populated"),
        P.PCR_COMPLETE: StatusInfo("PCR Complete", "PCR amplification has been performed"),
        P.GEL_CHECKED: StatusInfo("Gel Checked", "Gel electrophoresis results have been assessed"),
        P.POOLING_ASSIGNED: StatusInfo("Pooling Assigned", "Pooling actions have been assigned to all wells"),
        P.DONE: StatusInfo("Done", "Plate has been fully processed and pooled", True),
    },
}


def _kind(kind) -> WorkflowKind:
    try:
        return WorkflowKind(kind)
    except ValueError:
        raise ValidationError(f"Unknown workflow kind: '{kind}'") from None


def _table(kind, status) -> tuple:
    """Outgoing edges of *status*; unknown statuses raise ValidationError."""
    kind = _kind(kind)
    table = TRANSITIONS[kind]
    if status not in table:
        raise ValidationError(f"Unknown {ENTITY_NAMES[kind]} status: '{status}'")
    return table[status]


def is_valid_transition(kind, current: str, target: str) -> bool:
    """Return True if *target* is reachable from *current* in one step."""
    table = TRANSITIONS[_kind(kind)]
    return target in table.get(current, ())


def validate_transition(kind, current: str, target: str) -> None:
    """Raise ConflictError unless current -> target is an edge of the kind's table."""
    kind = _kind(kind)
    if not is_valid_transition(kind, current, target):
        logger.info("Rejected %s transition %s -> %s", kind.value, _label(current), _label(target))
        raise ConflictError(
            f"Cannot transition {ENTITY_NAMES[kind]} from {_label(current)} to {_label(target)}"
        )


def _label(status) -> str:
    return status.value if isinstance(status, Enum) else str(status)


def validate_sample_status_transition(current: str, target: str) -> None:
    validate_transition(WorkflowKind.SAMPLE, current, target)


def validate_run_status_transition(current: str, target: str) -> None:
    validate_transition(WorkflowKind.SEQUENCING_RUN, current, target)


def validate_plate_status_transition(current: str, target: str) -> None:
    validate_transition(WorkflowKind.PCR_PLATE, current, target)


def available_transitions(kind, status: str) -> list[str]:
    """Statuses reachable from *status* in one step, in table order."""
    return [s.value for s in _table(kind, status)]


def is_terminal(kind, status: str) -> bool:
    """Return True if no transition leaves *status*."""
    return not _table(kind, status)


def active_statuses(kind) -> list[str]:
    """Non-final statuses of a workflow, in declaration order."""
    return [s.value for s, info in STATUS_INFO[_kind(kind)].items() if not info.is_final]


def final_statuses(kind) -> list[str]:
    """Final statuses of a workflow, in declaration order."""
    return [s.value for s, info in STATUS_INFO[_kind(kind)].items() if info.is_final]
