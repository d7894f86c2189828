from pathlib import Path

import pytest

from psmio.core.diann.diann import DiaNNSynFileReader
from psmio.core.reader_factory import get_reader, get_reader_for_file

TEST_DATA_ROOT = Path(__file__).parents[1] / "examples"


def test_get_reader():
    reader = get_reader("DIANN", "Sample", TEST_DATA_ROOT / "DIANN_SYN/Sample_diann_syn.txt")

    assert isinstance(reader, DiaNNSynFileReader)
    assert reader.dataset_name == "Sample"
    assert reader.result_to_seq_map


def test_get_reader_unknown_type():
    with pytest.raises(ValueError):
        get_reader("sequest", "Sample", "Sample_syn.txt")


def test_get_reader_for_file(tmp_path):
    reader = get_reader_for_file(tmp_path / "My_Dataset_diann_syn.txt")

    assert isinstance(reader, DiaNNSynFileReader)
    assert reader.dataset_name == "My_Dataset"

    with pytest.raises(ValueError):
        get_reader_for_file(tmp_path / "My_Dataset_msgfplus_syn.txt")
