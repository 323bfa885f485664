"""96-well plate positions: validation, normalisation and index mapping."""

import re

from .errors import ValidationError


ROWS = list("ABCDEFGH")
COLUMNS = [f"{c:02d}" for c in range(1, 13)]

PLATE_ROWS = len(ROWS)
PLATE_COLUMNS = len(COLUMNS)
PLATE_WELL_COUNT = PLATE_ROWS * PLATE_COLUMNS

WELL_POSITION_REGEX = re.compile(r"[A-H](0[1-9]|1[0-2])")

# Row-major: A01, A02, ... A12, B01, ... H12
ALL_WELL_POSITIONS = [f"{row}{col}" for row in ROWS for col in COLUMNS]


def is_valid_well_position(position) -> bool:
    """Return True if *position* is a canonical well ID (A01-H12)."""
    if not isinstance(position, str):
        return False
    return WELL_POSITION_REGEX.fullmatch(position) is not None


def parse_well(position: str) -> tuple[int, int]:
    """Parse a canonical well ID like 'B03' into a zero-indexed (row, col) tuple.

    Raises:
        ValidationError: If the position is not canonical.
    """
    if not is_valid_well_position(position):
        raise ValidationError(f'Invalid well position "{position}"')
    return ROWS.index(position[0]), int(position[1:]) - 1


def well_to_str(row: int, col: int) -> str:
    """Convert zero-indexed (row, col) to a well ID like 'A01'."""
    if not (0 <= row < PLATE_ROWS and 0 <= col < PLATE_COLUMNS):
        raise ValidationError(f"Row/col out of range: ({row}, {col})")
    return f"{ROWS[row]}{COLUMNS[col]}"


def well_position_to_index(position: str) -> int:
    """Map a well ID to its 0-based row-major index (A01 -> 0, H12 -> 95)."""
    row, col = parse_well(position)
    return row * PLATE_COLUMNS + col


def index_to_well_position(index: int) -> str | None:
    """Inverse of well_position_to_index. Returns None outside 0-95."""
    if not 0 <= index < PLATE_WELL_COUNT:
        return None
    row, col = divmod(index, PLATE_COLUMNS)
    return well_to_str(row, col)


def normalise_well_position(position) -> str | None:
    """Canonicalise a loosely written well ID ('a1' -> 'A01', ' H12' -> 'H12').

    Returns None instead of raising when the input cannot be a well.
    """
    if not isinstance(position, str):
        return None
    match = re.fullmatch(r"([A-H])(\d{1,2})", position.strip().upper())
    if not match:
        return None
    normalised = f"{match.group(1)}{match.group(2).zfill(2)}"
    return normalised if is_valid_well_position(normalised) else None


def generate_empty_plate_grid() -> list[list[dict]]:
    """Return an 8x12 grid of {'position': ..., 'data': None} cells, rows A-H."""
    return [
        [{"position": f"{row}{col}", "data": None} for col in COLUMNS]
        for row in ROWS
    ]
