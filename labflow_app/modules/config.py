"""Settings for the sequencing workflow helpers."""

import logging

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Lab protocol defaults, overridable with LABFLOW_* environment variables."""

    model_config = SettingsConfigDict(env_prefix="LABFLOW_", env_file=".env", extra="ignore")

    log_level: str = "INFO"

    # PCR setup, per reaction (uL)
    pcr_master_mix_per_reaction_ul: float = 25.0
    pcr_primer_per_reaction_ul: float = 2.5
    pcr_overage_factor: float = 1.1

    # Opentrons pooling transfers
    opentrons_source_slot: str = "1"
    opentrons_dest_slot: str = "2"
    opentrons_volume_ul: float = 5.0

    # Illumina sample sheet
    investigator_name: str = "LabFlow"
    read_length: int = 301


settings = Settings()


def configure_logging(level: str | None = None) -> None:
    """Set the level of the package logger (handlers are left to the caller)."""
    logging.getLogger("labflow_app").setLevel((level or settings.log_level).upper())
