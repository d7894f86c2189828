import pytest

from psmio.core.cleavage import (
    PeptideCleavageState,
    PeptideCleavageStateCalculator,
    PeptideTerminusState,
    extract_clean_sequence,
    split_prefix_and_suffix_from_sequence,
)


@pytest.mark.parametrize(
    "sequence, expected",
    [
        ("K.PEPTIDE.G", (True, "PEPTIDE", "K", "G")),
        ("-.PEPTIDE.-", (True, "PEPTIDE", "-", "-")),
        ("..PEPTIDE..", (True, "PEPTIDE", "", "")),
        ("PEPTIDE", (False, "PEPTIDE", "", "")),
        ("K.PEPTIDE", (True, "PEPTIDE", "K", "")),
        ("PEPTIDE.G", (True, "PEPTIDE", "", "G")),
        ("", (False, "", "", "")),
    ],
)
def test_split_prefix_and_suffix(sequence, expected):
    assert split_prefix_and_suffix_from_sequence(sequence) == expected


def test_extract_clean_sequence():
    assert extract_clean_sequence("K.M*PEPT#IDE.G") == "MPEPTIDE"
    assert extract_clean_sequence("K.PEPTIDE.G", False) == "KPEPTIDEG"
    assert extract_clean_sequence("") == ""


@pytest.mark.parametrize(
    "peptide, expected",
    [
        ("K.AEPTIDER.A", PeptideCleavageState.FULL),
        ("A.SEMIK.L", PeptideCleavageState.PARTIAL),
        ("K.SEMIA.L", PeptideCleavageState.PARTIAL),
        ("A.NONSPEC.L", PeptideCleavageState.NON_SPECIFIC),
        ("K.PEPTIDER.A", PeptideCleavageState.PARTIAL),
        ("-.MPEPTIDER.A", PeptideCleavageState.FULL),
        ("-.MPEPTIDEA.A", PeptideCleavageState.NON_SPECIFIC),
        ("R.AEPTIDE.-", PeptideCleavageState.FULL),
        ("-.WHOLEPROTEIN.-", PeptideCleavageState.FULL),
        ("AEPTIDER", PeptideCleavageState.NON_SPECIFIC),
    ],
)
def test_compute_cleavage_state(peptide, expected):
    calculator = PeptideCleavageStateCalculator()

    assert calculator.compute_cleavage_state(peptide) == expected


def test_compute_number_of_missed_cleavages():
    calculator = PeptideCleavageStateCalculator()

    assert calculator.compute_number_of_missed_cleavages("K.AEPTIDER.A") == 0
    assert calculator.compute_number_of_missed_cleavages("R.ANOTHERKPEPK.-") == 1
    assert calculator.compute_number_of_missed_cleavages("K.AKRK*AR.A") == 3
    assert calculator.compute_number_of_missed_cleavages("AKAR") == 0


def test_compute_terminus_state():
    calculator = PeptideCleavageStateCalculator()

    assert calculator.compute_terminus_state("-", "A") == PeptideTerminusState.PROTEIN_N_TERMINUS
    assert calculator.compute_terminus_state("K", "]") == PeptideTerminusState.PROTEIN_C_TERMINUS
    assert calculator.compute_terminus_state("[", "-") == PeptideTerminusState.PROTEIN_N_AND_C_TERMINUS
    assert calculator.compute_terminus_state("K", "A") == PeptideTerminusState.NONE
