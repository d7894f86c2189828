from pathlib import Path

import pyarrow.parquet as pq

from psmio.core.cleavage import PeptideCleavageState, PeptideCleavageStateCalculator
from psmio.core.diann.diann import DiaNNSynFileReader
from psmio.core.format import PSM_SCHEMA
from psmio.core.psm import PSM, psms_to_dataframe, write_psms_to_parquet

TEST_DATA_ROOT = Path(__file__).parents[1] / "examples"

SYN_FILE = TEST_DATA_ROOT / "DIANN_SYN/Sample_diann_syn.txt"


def test_add_protein_ignores_blank_names():
    psm = PSM()

    psm.add_protein("P1")
    psm.add_protein("")
    psm.add_protein("   ")
    psm.add_protein("P1")

    assert psm.proteins == ["P1", "P1"]
    assert psm.protein_first == "P1"
    assert PSM().protein_first == ""


def test_set_peptide_with_cleavage_info():
    psm = PSM()

    psm.set_peptide_with_cleavage_info("A.SEMIK.L", PeptideCleavageStateCalculator())

    assert psm.peptide_clean_sequence == "SEMIK"
    assert psm.cleavage_state == PeptideCleavageState.PARTIAL
    assert psm.num_tryptic_termini == 1
    assert psm.num_missed_cleavages == 0


def test_to_record_matches_schema():
    psm = PSM(result_id=1, scan_number=10, charge=2, peptide="K.AEPTIDER.A")
    psm.add_protein("P1")
    psm.set_score("QValue", "0.01")

    record = psm.to_record()

    assert list(record.keys()) == PSM_SCHEMA.names
    assert record["cleavage_state"] == "UNKNOWN"
    assert record["additional_scores"] == [{"score_name": "QValue", "score_value": "0.01"}]


def test_psms_to_dataframe():
    reader = DiaNNSynFileReader("Sample", SYN_FILE, load_mods_and_seq_info=False)

    df = psms_to_dataframe(reader.read_psms())

    assert len(df) == 3
    assert df["scan_number"].tolist() == [1001, 1002, 1004]
    assert df["QValue"].tolist() == ["0.001", "0.004", "0.02"]
    assert "additional_scores" not in df.columns


def test_psms_to_dataframe_empty():
    df = psms_to_dataframe([])

    assert df.empty
    assert "scan_number" in df.columns


def test_write_psms_to_parquet(tmp_path):
    reader = DiaNNSynFileReader("Sample", SYN_FILE)
    output_path = tmp_path / "sample.psm.parquet"

    count = write_psms_to_parquet(reader.read_psms(), str(output_path), batch_size=2)

    assert count == 3
    table = pq.read_table(output_path)
    assert table.schema.names == PSM_SCHEMA.names
    assert table.column("result_id").to_pylist() == [1, 2, 4]
    assert table.column("seq_id").to_pylist() == [10, 11, 12]
    assert table.column("proteins").to_pylist()[2] == [
        "sp|P44444|PROT4_HUMAN",
        "sp|P55555|PROT5_HUMAN",
    ]


def test_write_empty_parquet(tmp_path):
    output_path = tmp_path / "empty.psm.parquet"

    count = write_psms_to_parquet([], str(output_path))

    assert count == 0
    assert pq.read_table(output_path).num_rows == 0
