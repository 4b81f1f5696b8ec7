"""Tests for whole-structure step measurement and export."""

from dataclasses import replace
from unittest.mock import patch

import pandas as pd
import pytest

from ntcgeometry.analysis.measurement import (
    StepMeasurement,
    measure_structure_steps,
    save_to_csv,
    step_name,
    to_dataframe,
)
from ntcgeometry.core.errors import InvalidArgumentError
from ntcgeometry.core.metrics import StepMetrics
from ntcgeometry.core.structure import Structure

from conftest import make_chain, make_residue


class TestStepName:
    """Test DNATCO step names."""

    def test_plain_name(self, step):
        """Test a step without alternate positions or insertion codes."""
        assert step_name("1BNA", step) == "1bna_A_DA_1_DC_2"

    def test_model_number(self, step):
        """Test the model tag of multi-model entries."""
        assert step_name("1BNA", step, multiple_models=True) == "1bna-m1_A_DA_1_DC_2"

    def test_alt_id_and_insertion_code(self):
        """Test alternate position and insertion code markers."""
        first = [replace(a, pdbx_PDB_ins_code="B") for a in make_residue("DG", 1)]
        second = make_residue("DT", 2, alt_id="A")
        assert step_name("7xyz", Structure(first + second)) == "7xyz_A_DG_1.B_DT.A_2"

    def test_single_residue(self):
        """Test that a lone residue has no step name."""
        with pytest.raises(InvalidArgumentError):
            step_name("1bna", Structure(make_residue("DA", 1)))


class TestMeasureStructureSteps:
    """Test measuring every step of a structure."""

    def test_measure_chain(self, trinucleotide):
        """Test that every step of a chain is measured."""
        measurements = measure_structure_steps(trinucleotide, "1abc")
        assert [m.name for m in measurements] == ["1abc_A_DG_1_DA_2", "1abc_A_DA_2_DT_3"]
        assert all(m.ntc is None and m.rmsd is None for m in measurements)

    def test_invalid_steps_are_skipped(self):
        """Test that a step lacking a base atom is left out."""
        atoms = make_residue("DG", 1) + make_residue("DA", 2, skip=("N9",)) + make_residue("DT", 3)
        assert measure_structure_steps(Structure(atoms), "1abc") == []

    def test_compare_to_ntc(self, trinucleotide, reference_table):
        """Test comparison of every step to a reference conformer."""
        measurements = measure_structure_steps(trinucleotide, "1abc", references=reference_table, ntc="BB00")
        assert measurements[0].ntc == "BB00"
        assert measurements[0].rmsd == pytest.approx(0.0, abs=1e-6)
        assert measurements[1].rmsd is not None

    def test_ntc_requires_references(self, trinucleotide):
        """Test that an NtC comparison without references is rejected."""
        with pytest.raises(InvalidArgumentError):
            measure_structure_steps(trinucleotide, "1abc", ntc="BB00")

    def test_invalid_ntc(self, trinucleotide, reference_table):
        """Test that an unavailable NtC is rejected before measuring."""
        with patch("ntcgeometry.analysis.measurement.split_to_dinucleotide_steps") as split:
            with pytest.raises(InvalidArgumentError):
                measure_structure_steps(trinucleotide, "1abc", references=reference_table, ntc="AA00")
        split.assert_not_called()

    def test_multiple_models_named(self):
        """Test that model numbers enter step names of multi-model structures."""
        structure = Structure(make_chain(["DA", "DC"]).atoms + make_chain(["DA", "DC"], model_num=2).atoms)
        names = [m.name for m in measure_structure_steps(structure, "2xyz")]
        assert names == ["2xyz-m1_A_DA_1_DC_2", "2xyz-m2_A_DA_1_DC_2"]


class TestExport:
    """Test DataFrame and CSV export."""

    @pytest.fixture
    def measurements(self):
        metrics = StepMetrics(*([0.5] * 9), 5.4, 4.8, 0.3)
        return [
            StepMeasurement("1abc_A_DA_1_DC_2", 1, "A", "DA", 1, "DC", 2, metrics),
            StepMeasurement("1abc_A_DC_2_DG_3", 1, "A", "DC", 2, "DG", 3, metrics, "BB00", 0.25, 12.0),
        ]

    def test_dataframe(self, measurements):
        """Test the DataFrame layout."""
        df = to_dataframe(measurements)
        assert len(df) == 2
        assert list(df.columns[:7]) == [
            "step", "model", "chain", "first_comp_id", "first_seq_id", "second_comp_id", "second_seq_id",
        ]
        assert df.loc[0, "alpha_2"] == pytest.approx(28.6478897565)
        assert df.loc[0, "cc"] == pytest.approx(5.4)
        assert pd.isna(df.loc[0, "rmsd"])
        assert df.loc[1, "rmsd"] == pytest.approx(0.25)

    def test_dataframe_without_comparison(self, measurements):
        """Test that comparison columns are left out when nothing was compared."""
        df = to_dataframe(measurements[:1])
        assert "rmsd" not in df.columns

    def test_save_to_csv(self, measurements, tmp_path):
        """Test that the CSV is written, creating parent directories."""
        output = tmp_path / "results" / "steps.csv"
        save_to_csv(measurements, output)

        df = pd.read_csv(output)
        assert list(df["step"]) == ["1abc_A_DA_1_DC_2", "1abc_A_DC_2_DG_3"]

    def test_save_to_unwritable_path(self, measurements, tmp_path):
        """Test that write failures surface as OSError."""
        blocker = tmp_path / "file"
        blocker.write_text("")
        with pytest.raises(OSError, match="Failed to save CSV"):
            save_to_csv(measurements, blocker / "steps.csv")
