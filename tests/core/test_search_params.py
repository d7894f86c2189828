import pytest

from psmio.core.search_params import (
    SearchEngineParameters,
    parse_key_value_setting,
    read_key_value_param_file,
)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("key=value", ("key", "value")),
        ("  key =  value  ", ("key", "value")),
        ("key = value # comment", ("key", "value")),
        ("key = a=b", ("key", "a=b")),
        ("key =", ("key", "")),
        ("=value", ("", "")),
        ("no delimiter", ("", "")),
        ("", ("", "")),
    ],
)
def test_parse_key_value_setting(text, expected):
    assert parse_key_value_setting(text) == expected


def test_read_key_value_param_file(tmp_path):
    param_file = tmp_path / "search.params"
    param_file.write_text(
        "# header comment\n"
        "\n"
        "search_enzyme_name_1 = trypsin\n"
        "just text\n"
        "num_enzyme_termini = 1\n"
        "num_enzyme_termini = 2  # later keys win\n"
    )
    params = SearchEngineParameters("DIA-NN")

    read_key_value_param_file(param_file, params)

    assert params.parameters == {
        "search_enzyme_name_1": "trypsin",
        "num_enzyme_termini": "2",
    }
    assert params.search_engine_param_file_path == str(param_file)


def test_read_key_value_param_file_missing(tmp_path):
    params = SearchEngineParameters("DIA-NN")

    with pytest.raises(FileNotFoundError):
        read_key_value_param_file(tmp_path / "missing.params", params)


def test_get_parameter_with_prefix():
    params = SearchEngineParameters("DIA-NN")
    params.add_update_parameter("msfragger.precursor_mass_units", "1")

    assert params.get_parameter("precursor_mass_units") is None
    assert params.get_parameter("precursor_mass_units", "msfragger.") == "1"


def test_defaults():
    params = SearchEngineParameters("DIA-NN")

    assert params.enzyme == ""
    assert params.min_number_termini is None
    assert params.max_number_internal_cleavages == 4
    assert params.precursor_mass_tolerance_da == 0.0
    assert params.precursor_mass_tolerance_ppm == 0.0
