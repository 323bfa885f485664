"""Plate map views: well records laid out on the 8x12 grid."""

from dataclasses import asdict, is_dataclass

import numpy as np
import pandas as pd

from .errors import ValidationError
from .plate_utils import ROWS, generate_empty_plate_grid, parse_well


def _as_dict(well) -> dict:
    return asdict(well) if is_dataclass(well) else dict(well)


def build_plate_map(wells) -> list[list[dict]]:
    """Overlay well records onto an empty plate grid.

    Args:
        wells: Records with a canonical ``position`` (dataclasses or dicts).

    Returns:
        8x12 grid; each cell has position, row, column and data (the well's
        fields, or None for an empty well).
    """
    grid = generate_empty_plate_grid()
    for row in grid:
        for cell in row:
            cell["row"] = cell["position"][0]
            cell["column"] = cell["position"][1:]

    for well in wells:
        data = _as_dict(well)
        position = data.get("position")
        try:
            r, c = parse_well(position)
        except ValidationError:
            raise ValidationError(f'Cannot place well at invalid position "{position}"') from None
        grid[r][c]["data"] = data
    return grid


def plate_frame(wells, field: str) -> pd.DataFrame:
    """8x12 DataFrame (index A-H, columns 1-12) of one field of the given wells."""
    df = pd.DataFrame(np.nan, index=ROWS, columns=list(range(1, 13)), dtype=object)
    df.index.name = "Row"
    for well in wells:
        data = _as_dict(well)
        r, c = parse_well(data["position"])
        df.loc[ROWS[r], c + 1] = data.get(field)
    return df
