"""Tests for parser module."""

import pytest

from labflow_app.modules.errors import ValidationError
from labflow_app.modules.parser import (
    IndexWell,
    PcrWell,
    SampleWell,
    parse_bulk_index_well_csv,
    parse_bulk_pcr_well_csv,
    parse_bulk_well_csv,
    wells_to_frame,
)


def _csv(*lines):
    return "\n".join(lines)


INDEX_HEADER = "position,i5Name,i5Sequence,i7Name,i7Sequence"


class TestParseBulkWellCsv:
    def test_all_columns(self):
        csv = _csv(
            "position,sampleId,wellType,dnaConcentrationNgUl,notes",
            "A01,SAMP-001,SAMPLE,12.5,first sample",
            "A02,SAMP-002,NTC,0,negative control",
        )
        result = parse_bulk_well_csv(csv)
        assert result == [
            SampleWell("A01", "SAMP-001", "SAMPLE", 12.5, "first sample"),
            SampleWell("A02", "SAMP-002", "NTC", 0.0, "negative control"),
        ]

    def test_concentration_is_float(self):
        result = parse_bulk_well_csv(_csv(
            "position,dnaConcentrationNgUl", "A01,42.7", "A02,0.5", "A03,100",
        ))
        assert isinstance(result[0].dna_concentration_ng_ul, float)
        assert result[0].dna_concentration_ng_ul == pytest.approx(42.7)
        assert result[1].dna_concentration_ng_ul == pytest.approx(0.5)
        assert result[2].dna_concentration_ng_ul == pytest.approx(100.0)

    def test_position_only(self):
        result = parse_bulk_well_csv(_csv("position", "A01", "B03"))
        assert result == [
            SampleWell("A01", None, "SAMPLE", None, None),
            SampleWell("B03", None, "SAMPLE", None, None),
        ]

    def test_blank_cells_are_none(self):
        result = parse_bulk_well_csv(_csv(
            "position,sampleId,wellType,dnaConcentrationNgUl,notes",
            "A01,,,,",
        ))
        assert result[0] == SampleWell("A01", None, "SAMPLE", None, None)

    def test_short_row_reads_missing_cells_as_blank(self):
        result = parse_bulk_well_csv(_csv("position,sampleId,notes", "A01,SAMP-001"))
        assert result[0].sample_id == "SAMP-001"
        assert result[0].notes is None

    def test_well_type_upper_cased(self):
        result = parse_bulk_well_csv(_csv("position,wellType", "A01,ntc"))
        assert result[0].well_type == "NTC"

    def test_normalises_positions(self):
        result = parse_bulk_well_csv(_csv("position", "A1", "b3", "H12"))
        assert [w.position for w in result] == ["A01", "B03", "H12"]

    def test_preserves_row_order(self):
        result = parse_bulk_well_csv(_csv("position", "H12", "A01", "C06"))
        assert [w.position for w in result] == ["H12", "A01", "C06"]

    def test_skips_blank_lines_and_crlf(self):
        result = parse_bulk_well_csv("position,sampleId\r\n\r\nA01,S1\r\n\r\nA02,S2\r\n")
        assert [w.sample_id for w in result] == ["S1", "S2"]

    def test_snake_case_headers(self):
        result = parse_bulk_well_csv(_csv("position,sample_id,well_type", "A01,S1,NTC"))
        assert result[0].sample_id == "S1"
        assert result[0].well_type == "NTC"

    def test_missing_position_column(self):
        with pytest.raises(ValidationError, match='CSV must contain a "position" column'):
            parse_bulk_well_csv(_csv("sampleId,wellType", "SAMP-001,SAMPLE"))

    def test_header_is_case_sensitive(self):
        with pytest.raises(ValidationError, match='"position" column'):
            parse_bulk_well_csv(_csv("Position", "A01"))

    def test_invalid_position(self):
        with pytest.raises(ValidationError, match='Invalid well position "Z99"'):
            parse_bulk_well_csv(_csv("position", "Z99"))

    def test_duplicate_position(self):
        with pytest.raises(ValidationError, match='Duplicate well position "A01"'):
            parse_bulk_well_csv(_csv("position", "A01", "A01"))

    def test_duplicate_after_normalisation(self):
        with pytest.raises(ValidationError, match='Duplicate well position "A01" on line 3'):
            parse_bulk_well_csv(_csv("position", "A01", "a1"))

    def test_error_reports_line_number(self):
        with pytest.raises(ValidationError, match="on line 4"):
            parse_bulk_well_csv(_csv("position", "A01", "A02", "Q01"))

    def test_header_only(self):
        with pytest.raises(
            ValidationError, match="CSV must contain a header row and at least one data row"
        ):
            parse_bulk_well_csv("position,sampleId")

    def test_empty_text(self):
        with pytest.raises(ValidationError, match="header row"):
            parse_bulk_well_csv("")

    def test_invalid_concentration(self):
        with pytest.raises(ValidationError, match='Invalid concentration value "abc"'):
            parse_bulk_well_csv(_csv("position,dnaConcentrationNgUl", "A01,abc"))

    @pytest.mark.parametrize("value", ["1_000", "inf", "nan", "1e999", "0x10"])
    def test_rejects_non_decimal_concentration(self, value):
        with pytest.raises(ValidationError, match=f'Invalid concentration value "{value}" on line 2'):
            parse_bulk_well_csv(_csv("position,dnaConcentrationNgUl", f"A01,{value}"))

    @pytest.mark.parametrize("value, expected", [("-1.5", -1.5), (".5", 0.5), ("2.", 2.0), ("1e3", 1000.0)])
    def test_accepts_decimal_notation(self, value, expected):
        result = parse_bulk_well_csv(_csv("position,dnaConcentrationNgUl", f"A01,{value}"))
        assert result[0].dna_concentration_ng_ul == pytest.approx(expected)

    def test_fails_atomically(self):
        csv = _csv("position", "A01", "A02", "A02", "A03")
        with pytest.raises(ValidationError):
            parse_bulk_well_csv(csv)

    def test_validation_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_bulk_well_csv(_csv("position", "Z99"))


class TestParseBulkPcrWellCsv:
    def test_all_columns(self):
        csv = _csv(
            "position,sampleLabel,assayType,wellType,notes",
            "A01,SAMP-001_16s,16S,SAMPLE,test note",
            "A02,SAMP-002_16s,16S,NTC,control",
        )
        result = parse_bulk_pcr_well_csv(csv)
        assert result == [
            PcrWell("A01", "SAMP-001_16s", "16S", "SAMPLE", "test note"),
            PcrWell("A02", "SAMP-002_16s", "16S", "NTC", "control"),
        ]

    def test_defaults_well_type(self):
        result = parse_bulk_pcr_well_csv(_csv("position,sampleLabel", "A01,SAMP-001"))
        assert result[0].well_type == "SAMPLE"
        assert result[0].assay_type is None
        assert result[0].notes is None

    def test_missing_position_column(self):
        with pytest.raises(ValidationError, match='CSV must contain a "position" column'):
            parse_bulk_pcr_well_csv(_csv("sampleLabel,assayType", "SAMP-001,16S"))

    def test_duplicate_position(self):
        with pytest.raises(ValidationError, match='Duplicate well position "B02"'):
            parse_bulk_pcr_well_csv(_csv("position", "B2", "B02"))

    def test_header_only(self):
        with pytest.raises(
            ValidationError, match="CSV must contain a header row and at least one data row"
        ):
            parse_bulk_pcr_well_csv("position,sampleLabel")

    def test_invalid_position(self):
        with pytest.raises(ValidationError, match='Invalid well position "A13" on line 3'):
            parse_bulk_pcr_well_csv(_csv("position,sampleLabel", "A01,S1_16s", "A13,S2_16s"))


class TestParseBulkIndexWellCsv:
    def test_all_columns(self):
        csv = _csv(
            INDEX_HEADER,
            "A01,i5_idx1,ATCGATCG,i7_idx1,GCTAGCTA",
            "A02,i5_idx2,TTAACCGG,i7_idx2,CCAATTGG",
        )
        result = parse_bulk_index_well_csv(csv)
        assert result == [
            IndexWell("A01", "i5_idx1", "ATCGATCG", "i7_idx1", "GCTAGCTA", "ATCGATCGGCTAGCTA"),
            IndexWell("A02", "i5_idx2", "TTAACCGG", "i7_idx2", "CCAATTGG", "TTAACCGGCCAATTGG"),
        ]

    def test_merged_sequence_is_i5_then_i7(self):
        result = parse_bulk_index_well_csv(_csv(INDEX_HEADER, "A01,idx_a,AAAA,idx_b,TTTT"))
        assert result[0].merged_sequence == "AAAATTTT"

    @pytest.mark.parametrize("missing", ["i5Name", "i5Sequence", "i7Name", "i7Sequence"])
    def test_missing_required_column(self, missing):
        header = ",".join(c for c in INDEX_HEADER.split(",") if c != missing)
        with pytest.raises(ValidationError, match=f'CSV must contain an "{missing}" column'):
            parse_bulk_index_well_csv(_csv(header, "A01,x,y,z"))

    def test_missing_position_column(self):
        with pytest.raises(ValidationError, match='CSV must contain a "position" column'):
            parse_bulk_index_well_csv(_csv(
                "i5Name,i5Sequence,i7Name,i7Sequence", "i5_idx1,ATCGATCG,i7_idx1,GCTAGCTA",
            ))

    def test_first_missing_column_reported(self):
        with pytest.raises(ValidationError, match='"i5Sequence" column'):
            parse_bulk_index_well_csv(_csv("position,i5Name", "A01,x"))

    def test_blank_required_cell(self):
        with pytest.raises(ValidationError, match='Missing value for "i5Name" on line 2'):
            parse_bulk_index_well_csv(_csv(INDEX_HEADER, "A01,,AAAA,idx_b,TTTT"))

    def test_invalid_position(self):
        with pytest.raises(ValidationError, match='Invalid well position "I01"'):
            parse_bulk_index_well_csv(_csv(INDEX_HEADER, "I01,a,AAAA,b,TTTT"))

    def test_header_only(self):
        with pytest.raises(
            ValidationError, match="CSV must contain a header row and at least one data row"
        ):
            parse_bulk_index_well_csv(INDEX_HEADER + "\n\n")


class TestWellsToFrame:
    def test_columns_use_csv_names(self):
        wells = parse_bulk_well_csv(_csv("position,sampleId", "A01,S1", "A02,S2"))
        df = wells_to_frame(wells)
        assert list(df.columns) == [
            "position", "sampleId", "wellType", "dnaConcentrationNgUl", "notes",
        ]
        assert list(df["position"]) == ["A01", "A02"]

    def test_index_wells(self):
        wells = parse_bulk_index_well_csv(_csv(INDEX_HEADER, "A01,a,AAAA,b,TTTT"))
        df = wells_to_frame(wells)
        assert df.loc[0, "mergedSequence"] == "AAAATTTT"
