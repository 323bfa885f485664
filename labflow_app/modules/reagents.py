"""Reagent requirement calculations for extraction and PCR setup."""

from dataclasses import asdict, dataclass

import numpy as np
import pandas as pd

from .config import settings


@dataclass(frozen=True)
class ReagentFormula:
    reagent_name: str
    per_sample: float  # uL, or mg for solids
    unit: str  # 'uL' or 'mg'
    overage_factor: float  # 1.1 = 10% extra for pipetting loss


@dataclass(frozen=True)
class ReagentRequirement:
    reagent_name: str
    quantity: float
    unit: str  # 'mL' or 'mg'


# Standard metabarcoding extraction, per sample.
DEFAULT_REAGENT_FORMULAS = [
    ReagentFormula("Lysis Solution", 600, "uL", 1.1),
    ReagentFormula("Soil Lysis Additive", 100, "uL", 1.1),
    ReagentFormula("SPRI Bead Binding Solution", 300, "uL", 1.15),
    ReagentFormula("Flocculant Solution", 200, "uL", 1.1),
    ReagentFormula("10mM TRIS", 100, "uL", 1.1),
    ReagentFormula("80% Ethanol", 800, "uL", 1.1),
    ReagentFormula("Sterilised Sandblasting Grit", 50, "mg", 1.2),
    ReagentFormula("Concentrated SPRI Beads", 20, "uL", 1.15),
]


def calculate_reagent_requirements(
    sample_count: int,
    batch_factor: float = 1.0,
    formulas: list[ReagentFormula] | None = None,
) -> list[ReagentRequirement]:
    """Reagent totals for extracting *sample_count* samples.

    Args:
        sample_count: Number of samples in the batch.
        batch_factor: Multiplier for repeated or redundant batches (1 = single batch).
        formulas: Per-sample formulas; defaults to DEFAULT_REAGENT_FORMULAS.

    Returns:
        One requirement per formula, in formula order. The single-batch total
        is rounded up to the whole uL (liquids) or mg (solids) and then scaled
        by batch_factor. Liquids are reported in mL.
    """
    formulas = formulas or DEFAULT_REAGENT_FORMULAS
    per_sample = np.array([f.per_sample * f.overage_factor for f in formulas], dtype=float)
    # round first so float noise (600 * 1.1 = 660.0000000000001) does not add a unit
    totals = np.ceil(np.round(sample_count * per_sample, 6)) * batch_factor

    requirements = []
    for formula, total in zip(formulas, totals):
        if formula.unit == "mg":
            requirements.append(ReagentRequirement(formula.reagent_name, float(total), "mg"))
        else:
            requirements.append(ReagentRequirement(formula.reagent_name, float(total) / 1000, "mL"))
    return requirements


def calculate_pcr_reagent_requirements(reaction_count: int) -> list[ReagentRequirement]:
    """Master mix and primer volumes (mL) for *reaction_count* PCR reactions.

    The reaction count is padded by the PCR overage factor and rounded up to
    whole reactions before the per-reaction volumes are applied.
    """
    reactions = int(np.ceil(round(reaction_count * settings.pcr_overage_factor, 6)))
    primer_ml = reactions * settings.pcr_primer_per_reaction_ul / 1000
    return [
        ReagentRequirement("PCR Master Mix", reactions * settings.pcr_master_mix_per_reaction_ul / 1000, "mL"),
        ReagentRequirement("Forward Primer", primer_ml, "mL"),
        ReagentRequirement("Reverse Primer", primer_ml, "mL"),
    ]


def requirements_to_frame(requirements: list[ReagentRequirement]) -> pd.DataFrame:
    """Tabulate requirements with columns Reagent, Quantity, Unit."""
    df = pd.DataFrame([asdict(r) for r in requirements], columns=["reagent_name", "quantity", "unit"])
    return df.rename(columns={"reagent_name": "Reagent", "quantity": "Quantity", "unit": "Unit"})
