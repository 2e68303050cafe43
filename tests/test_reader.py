"""Tests for the PDB reader: dispatch loop, sink calls, failures and options."""

import gzip

import numpy as np
import pytest

from pdbread import PDBReader, ReaderConfig, read_pdb
from pdbread.filters import backbone_trace
from pdbread.molecule import Molecule, apply_connections

SCENARIO_ATOM = "ATOM      1  CA  ALA A   1      11.104  13.207   2.500  1.00 20.00           C"


class _RecordingHandle:
    def __init__(self, calls, index):
        self.calls = calls
        self.index = index

    def set_position(self, position):
        self.calls.append(("set_position", self.index, tuple(position)))

    def set_name(self, name):
        self.calls.append(("set_name", self.index, name))


class RecordingSink:
    """Minimal sink that records every call the reader makes."""

    def __init__(self):
        self.calls = []
        self.count = 0

    def add_atom(self, atomic_number):
        self.calls.append(("add_atom", atomic_number))
        handle = _RecordingHandle(self.calls, self.count)
        self.count += 1
        return handle


# ======================================================================
# Core behaviour
# ======================================================================

class TestReadBasics:
    def test_single_atom_scenario(self, reader):
        sink = RecordingSink()
        result = reader.read([SCENARIO_ATOM], sink)
        assert result.success
        assert sink.calls == [
            ("add_atom", 6),
            ("set_position", 0, (11.104, 13.207, 2.5)),
            ("set_name", 0, "CA"),
        ]

    def test_default_molecule(self, reader):
        result = reader.read_text(SCENARIO_ATOM + "\n")
        mol = result.molecule
        assert mol.num_atoms == 1
        assert mol.atomic_numbers == [6]
        assert mol.names == ["CA"]
        assert mol.positions[0] == pytest.approx((11.104, 13.207, 2.5))

    def test_empty_stream(self, reader, molecule):
        result = reader.read([], molecule)
        assert result.success
        assert not result.terminated
        assert molecule.num_atoms == 0
        assert result.biomt_matrices == []
        assert result.smtry_matrices == []

    def test_unknown_keywords_have_no_effect(self, reader):
        plain = reader.read_text(SCENARIO_ATOM)
        noisy = reader.read_text("\n".join([
            "HEADER    TEST",
            "SEQRES   1 A    1  ALA",
            "CRYST1   50.000   50.000   50.000  90.00  90.00  90.00 P 1",
            "",
            SCENARIO_ATOM,
            "MASTER        0    0    0",
        ]))
        assert noisy.success
        assert noisy.molecule.positions == plain.molecule.positions
        assert noisy.molecule.atomic_numbers == plain.molecule.atomic_numbers
        assert noisy.warnings == []

    def test_crlf_line_endings(self, reader, molecule):
        result = reader.read([SCENARIO_ATOM + "\r\n", "END\r\n"], molecule)
        assert result.success
        assert molecule.names == ["CA"]

    def test_result_is_truthy_on_success(self, reader):
        assert reader.read_text(SCENARIO_ATOM)


class TestTerminators:
    def test_end_stops_reading(self, reader, atom_line):
        text = "\n".join([atom_line(1), "END", atom_line(2), "CONECT    1    2"])
        result = reader.read_text(text)
        assert result.success
        assert result.terminated
        assert result.lines_read == 2
        assert result.molecule.num_atoms == 1
        assert result.connections == []

    def test_only_first_model(self, reader, atom_line):
        text = "\n".join([
            "MODEL        1",
            atom_line(1, x=1.0),
            "ENDMDL",
            "MODEL        2",
            atom_line(1, x=2.0),
            "ENDMDL",
            "END",
        ])
        result = reader.read_text(text)
        assert result.molecule.num_atoms == 1
        assert result.molecule.positions[0][0] == pytest.approx(1.0)

    def test_custom_terminators(self, atom_line):
        reader = PDBReader(ReaderConfig(terminators=("END",)))
        text = "\n".join(["MODEL        1", atom_line(1), "ENDMDL", atom_line(2), "END"])
        result = reader.read_text(text)
        # ENDMDL still starts with END
        assert result.molecule.num_atoms == 1

    def test_no_terminator(self, reader, atom_line):
        result = reader.read_text("\n".join([atom_line(1), atom_line(2)]))
        assert result.success
        assert not result.terminated
        assert result.molecule.num_atoms == 2


# ======================================================================
# Failures
# ======================================================================

class TestFailures:
    def test_malformed_x_fails_read(self, reader, atom_line):
        bad = SCENARIO_ATOM[:30] + "  11.x04" + SCENARIO_ATOM[38:]
        result = reader.read_text("\n".join([atom_line(1), bad, atom_line(3)]))
        assert not result.success
        assert len(result.errors) == 1
        message = result.errors[0]
        assert "x coordinate" in message
        assert "  11.x04" in message
        assert message.startswith("line 2: ATOM record")
        # first atom stays, failing line and everything after are not added
        assert result.molecule.num_atoms == 1
        assert result.lines_read == 2

    @pytest.mark.parametrize("x_text", ["     nan", "  1_1.10", "Infinity", "    -inf"])
    def test_non_decimal_x_fails_read(self, reader, x_text):
        line = SCENARIO_ATOM[:30] + x_text + SCENARIO_ATOM[38:]
        result = reader.read_text(line)
        assert not result.success
        assert "x coordinate" in result.errors[0]
        assert repr(x_text) in result.errors[0]
        assert result.molecule.num_atoms == 0

    def test_digit_separator_in_conect_fails_read(self, reader):
        result = reader.read_text("CONECT    1  2_0    3")
        assert not result.success
        assert "bonded atom serial 1" in result.errors[0]
        assert result.connections == []

    def test_failure_does_not_raise(self, reader):
        result = reader.read_text("CONECT   ab")
        assert not result
        assert "anchor atom serial" in result.errors[0]

    def test_bad_transform_row(self, reader, transform_line):
        result = reader.read_text(transform_line("BIOMT", 4, 1, 1.0, 0.0, 0.0, 0.0))
        assert not result.success
        assert "BIOMT record" in result.errors[0]
        assert "row index" in result.errors[0]

    def test_bad_helix(self, reader, helix_line):
        line = helix_line(1, "HA", "GLY", "A", 86, "GLY", "A", 94)
        line = line[:33] + "  ?4" + line[37:]
        result = reader.read_text(line)
        assert not result.success
        assert "HELIX record" in result.errors[0]
        assert "terminal residue sequence number" in result.errors[0]

    def test_later_records_not_collected(self, reader, transform_line):
        text = "\n".join([
            "CONECT   xx",
            transform_line("BIOMT", 1, 1, 1.0, 0.0, 0.0, 0.0),
            transform_line("BIOMT", 2, 1, 0.0, 1.0, 0.0, 0.0),
            transform_line("BIOMT", 3, 1, 0.0, 0.0, 1.0, 0.0),
        ])
        result = reader.read_text(text)
        assert not result.success
        assert result.biomt_matrices == []


# ======================================================================
# Full sample
# ======================================================================

class TestSampleStructure:
    def test_counts(self, reader, sample_pdb):
        result = reader.read_text(sample_pdb)
        assert result.success
        assert result.terminated
        assert result.molecule.num_atoms == 7
        assert len(result.connections) == 2
        assert len(result.helices) == 1
        assert len(result.sheets) == 1
        assert result.warnings == []

    def test_elements(self, reader, sample_pdb):
        mol = reader.read_text(sample_pdb).molecule
        assert mol.elements == ["N", "C", "O", "C", "O", "C", "Zn"]
        assert mol.names[-1] == "ZN"

    def test_transforms(self, reader, sample_pdb):
        result = reader.read_text(sample_pdb)
        assert len(result.biomt_matrices) == 1
        np.testing.assert_allclose(result.biomt_matrices[0], np.eye(4))
        assert result.smtry_stack.shape == (2, 4, 4)
        expected = np.array([
            [-1.0, 0.0, 0.0, 12.5],
            [0.0, -1.0, 0.0, 0.0],
            [0.0, 0.0, 1.0, 25.0],
            [0.0, 0.0, 0.0, 1.0],
        ])
        np.testing.assert_allclose(result.smtry_matrices[1], expected)

    def test_conect_values(self, reader, sample_pdb):
        result = reader.read_text(sample_pdb)
        second = result.connections[1]
        assert second.anchor == 2
        assert second.bonded == (1, 3)

    def test_connections_to_bonds(self, reader, sample_pdb):
        result = reader.read_text(sample_pdb)
        added = apply_connections(result.molecule, result.connections, result.serial_to_index)
        assert added == 2
        pairs = {frozenset((b.atom1, b.atom2)) for b in result.molecule.bonds}
        assert pairs == {frozenset((0, 1)), frozenset((1, 2))}

    def test_secondary_structure(self, reader, sample_pdb):
        result = reader.read_text(sample_pdb)
        helix = result.helices[0]
        assert (helix.start.res_name, helix.end.seq) == ("ALA", 3)
        sheet = result.sheets[0]
        assert sheet.sheet_id == "S1"
        assert sheet.num_strands == 2

    def test_summary(self, reader, sample_pdb):
        summary = reader.read_text(sample_pdb).summary()
        assert summary["atoms"] == 7
        assert summary["biomt"] == 1
        assert summary["smtry"] == 2
        assert summary["errors"] == []

    def test_hetatm_disabled(self, sample_pdb):
        result = PDBReader(ReaderConfig(accept_hetatm=False)).read_text(sample_pdb)
        assert result.molecule.num_atoms == 6
        assert 30 not in result.molecule.atomic_numbers

    def test_empty_stacks(self, reader):
        result = reader.read_text(SCENARIO_ATOM)
        assert result.biomt_stack.shape == (0, 4, 4)


class TestTransformVariants:
    def test_incomplete_operator_warns(self, reader, transform_line):
        text = "\n".join([
            transform_line("BIOMT", 1, 1, 1.0, 0.0, 0.0, 0.0),
            transform_line("BIOMT", 2, 1, 0.0, 1.0, 0.0, 0.0),
        ])
        result = reader.read_text(text)
        assert result.success
        assert result.biomt_matrices == []
        assert any("incomplete BIOMT operator" in w for w in result.warnings)

    @pytest.mark.parametrize("variant", ["legacy", "auto"])
    def test_legacy_lines(self, transform_line, variant):
        text = "\n".join(
            transform_line("SMTRY", row, 1, 0.0, 0.0, 0.0, 12.5, legacy=True)
            for row in (1, 2, 3)
        )
        result = PDBReader(ReaderConfig(variant=variant)).read_text(text)
        assert result.success
        np.testing.assert_allclose(result.smtry_matrices[0][:3, 3], [12.5, 12.5, 12.5])

    def test_wide_line_under_legacy_variant_fails(self, transform_line):
        line = transform_line("BIOMT", 1, 1, 1.0, 0.0, 0.0, 37.5)
        result = PDBReader(ReaderConfig(variant="legacy")).read_text(line)
        assert not result.success
        assert "translation" in result.errors[0]


# ======================================================================
# Elements
# ======================================================================

class TestElements:
    def test_unknown_element_default(self, reader, atom_line):
        result = reader.read_text(atom_line(element="Xx"))
        assert result.success
        assert result.molecule.atomic_numbers == [0]
        assert len(result.warnings) == 1
        assert result.warnings[0].startswith("line 1:")

    def test_unknown_element_skip(self, atom_line):
        reader = PDBReader(ReaderConfig(unknown_element="skip"))
        result = reader.read_text("\n".join([atom_line(1, element="Xx"), atom_line(2)]))
        assert result.success
        assert result.molecule.num_atoms == 1
        assert result.atoms_skipped == 1
        assert 1 not in result.serial_to_index
        assert result.serial_to_index[2] == 0

    def test_unknown_element_reject(self, atom_line):
        reader = PDBReader(ReaderConfig(unknown_element="reject"))
        result = reader.read_text(atom_line(element="Xx"))
        assert not result.success
        assert "element symbol" in result.errors[0]
        assert "'Xx'" in result.errors[0]
        assert result.molecule.num_atoms == 0

    def test_element_case_insensitive(self, reader, atom_line):
        result = reader.read_text(atom_line(name="FE", element="fe"))
        assert result.molecule.atomic_numbers == [26]

    def test_infer_from_name(self, reader, atom_line):
        text = "\n".join([atom_line(1, name=" CA", element=""), atom_line(2, name="FE", element="")])
        result = reader.read_text(text)
        assert result.molecule.atomic_numbers == [6, 26]

    def test_no_inference(self, atom_line):
        reader = PDBReader(ReaderConfig(infer_element=False))
        result = reader.read_text(atom_line(element=""))
        assert result.molecule.atomic_numbers == [0]
        assert result.warnings

    def test_custom_lookup(self, atom_line):
        reader = PDBReader(element_lookup=lambda symbol: 99)
        result = reader.read_text(atom_line(element="Q"))
        assert result.molecule.atomic_numbers == [99]


# ======================================================================
# Filters and policies
# ======================================================================

class TestSelection:
    def test_atom_names(self, sample_pdb):
        result = PDBReader(ReaderConfig(atom_names=["CA", "O"])).read_text(sample_pdb)
        assert result.molecule.names == ["CA", "O", "CA", "O", "CA"]
        assert result.atoms_skipped == 2
        assert 1 not in result.serial_to_index

    def test_backbone_trace_predicate(self, sample_pdb):
        result = PDBReader(ReaderConfig(atom_filter=backbone_trace())).read_text(sample_pdb)
        assert result.molecule.num_atoms == 5

    def test_filtered_serials_skip_bonds(self, sample_pdb):
        result = PDBReader(ReaderConfig(atom_names=["CA", "O"])).read_text(sample_pdb)
        added = apply_connections(result.molecule, result.connections, result.serial_to_index)
        assert added == 1

    @pytest.mark.parametrize("policy,expected", [("all", 3), ("first", 2), ("skip", 1)])
    def test_altloc(self, atom_line, policy, expected):
        text = "\n".join([
            atom_line(1, name=" N", element="N"),
            atom_line(2, alt="A", x=1.0),
            atom_line(3, alt="B", x=1.2),
        ])
        result = PDBReader(ReaderConfig(altloc=policy)).read_text(text)
        assert result.molecule.num_atoms == expected

    def test_lenient_informational(self):
        line = SCENARIO_ATOM[:60] + " ??.??" + SCENARIO_ATOM[66:]
        strict = PDBReader().read_text(line)
        assert not strict.success
        assert "temperature factor" in strict.errors[0]

        lenient = PDBReader(ReaderConfig(strict=False)).read_text(line)
        assert lenient.success
        assert lenient.molecule.num_atoms == 1
        assert lenient.warnings[0].startswith("line 1: ATOM record")

    def test_lenient_keeps_mandatory(self):
        line = SCENARIO_ATOM[:30] + "  11.x04" + SCENARIO_ATOM[38:]
        result = PDBReader(ReaderConfig(strict=False)).read_text(line)
        assert not result.success

    def test_field_policy_override(self, atom_line):
        config = ReaderConfig(field_policies={"ATOM.chain_id": "mandatory"})
        result = PDBReader(config).read_text(atom_line(chain=" "))
        assert not result.success
        assert "chain identifier" in result.errors[0]


# ======================================================================
# Files
# ======================================================================

class TestReadFile:
    def test_plain_file(self, tmp_path, reader, sample_pdb):
        path = tmp_path / "1tst.pdb"
        path.write_text(sample_pdb)
        result = reader.read_file(str(path))
        assert result.success
        assert result.molecule.name == "1tst"
        assert result.molecule.num_atoms == 7

    def test_gzip_file(self, tmp_path, reader, sample_pdb):
        path = tmp_path / "1tst.pdb.gz"
        with gzip.open(path, "wt") as f:
            f.write(sample_pdb)
        result = reader.read_file(str(path))
        assert result.success
        assert result.molecule.name == "1tst"
        assert len(result.smtry_matrices) == 2

    def test_into_given_molecule(self, tmp_path, reader, sample_pdb):
        path = tmp_path / "1tst.ent"
        path.write_text(sample_pdb)
        mol = Molecule("mine")
        result = reader.read_file(str(path), mol)
        assert result.molecule is mol
        assert mol.num_atoms == 7

    def test_read_pdb(self, tmp_path, sample_pdb):
        path = tmp_path / "1tst.pdb"
        path.write_text(sample_pdb)
        result = read_pdb(str(path), atom_names=["CA"])
        assert result.molecule.num_atoms == 3
        assert result.molecule.coords.shape == (3, 3)

    def test_missing_file(self, tmp_path, reader):
        with pytest.raises(FileNotFoundError):
            reader.read_file(str(tmp_path / "missing.pdb"))
