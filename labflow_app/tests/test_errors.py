"""Tests for errors and config modules."""

import logging

from labflow_app.modules.config import Settings, configure_logging
from labflow_app.modules.errors import ConflictError, LabflowError, ValidationError


class TestErrors:
    def test_validation_error_body(self):
        err = ValidationError('Invalid well position "Z99" on line 2')
        assert err.to_dict() == {
            "statusCode": 400,
            "error": "ValidationError",
            "code": "VALIDATION_ERROR",
            "message": 'Invalid well position "Z99" on line 2',
        }

    def test_details_included(self):
        err = ConflictError("Cannot transition", details={"from": "SETUP"})
        assert err.to_dict()["details"] == {"from": "SETUP"}

    def test_hierarchy(self):
        assert issubclass(ValidationError, LabflowError)
        assert issubclass(ConflictError, ValueError)
        assert str(ConflictError("boom")) == "boom"


class TestSettings:
    def test_defaults(self):
        s = Settings()
        assert s.pcr_master_mix_per_reaction_ul == 25.0
        assert s.pcr_overage_factor == 1.1

    def test_pcr_fields_match_reagent_calculator(self):
        pcr_fields = sorted(name for name in Settings.model_fields if name.startswith("pcr_"))
        assert pcr_fields == [
            "pcr_master_mix_per_reaction_ul",
            "pcr_overage_factor",
            "pcr_primer_per_reaction_ul",
        ]

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("LABFLOW_OPENTRONS_VOLUME_UL", "7.5")
        assert Settings().opentrons_volume_ul == 7.5

    def test_configure_logging(self):
        configure_logging("debug")
        assert logging.getLogger("labflow_app").level == logging.DEBUG
        configure_logging("warning")
        assert logging.getLogger("labflow_app").level == logging.WARNING
