import random

import pytest

from psmio.core.diann.columns import (
    DIANN_SCORE_COLUMNS,
    DiaNNSynFileColumns,
    default_schema,
    header_string_for,
    resolve_header,
)


def test_default_schema_covers_every_column_once():
    schema = default_schema()

    assert list(schema.keys()) == list(DiaNNSynFileColumns)
    headers = [h.lower() for h in schema.values()]
    assert len(headers) == len(set(headers))


def test_default_schema_is_read_only():
    schema = default_schema()

    with pytest.raises(TypeError):
        schema[DiaNNSynFileColumns.Scan] = "ScanNum"


def test_published_header_names():
    assert header_string_for(DiaNNSynFileColumns.RankEValue) == "Rank_EValue"
    assert header_string_for(DiaNNSynFileColumns.NumberOfMatchedIons) == "MatchedIons"
    assert header_string_for(DiaNNSynFileColumns.TotalNumberOfIons) == "TotalIons"
    assert header_string_for(DiaNNSynFileColumns.DelM_DiaNN) == "DelM_DiaNN"


def test_header_string_for_unknown_column():
    with pytest.raises(KeyError):
        header_string_for("Scan")


def test_resolve_header_any_order_and_case():
    headers = list(default_schema().values())
    rng = random.Random(7)

    for _ in range(10):
        shuffled = headers[:]
        rng.shuffle(shuffled)
        mixed_case = [
            h.upper() if i % 3 == 0 else h.lower() if i % 3 == 1 else h
            for i, h in enumerate(shuffled)
        ]

        column_map = resolve_header(mixed_case)

        assert len(column_map) == len(headers)
        for column, header in default_schema().items():
            assert column_map[column] == shuffled.index(header)


def test_resolve_header_missing_and_unknown_columns():
    column_map = resolve_header(["Scan", "SomethingElse", "peptide", "charge"])

    assert column_map == {
        DiaNNSynFileColumns.Scan: 0,
        DiaNNSynFileColumns.Peptide: 2,
        DiaNNSynFileColumns.Charge: 3,
    }
    assert DiaNNSynFileColumns.ResultID not in column_map


def test_resolve_header_keeps_first_duplicate():
    column_map = resolve_header(["Scan", "Charge", "SCAN"])

    assert column_map[DiaNNSynFileColumns.Scan] == 0


def test_resolve_header_is_repeatable():
    header = ["ResultID", "Scan", "Charge", "Peptide", "Protein"]

    assert resolve_header(header) == resolve_header(header)


def test_score_columns_exclude_parsed_fields():
    parsed = {
        DiaNNSynFileColumns.ResultID,
        DiaNNSynFileColumns.Scan,
        DiaNNSynFileColumns.Charge,
        DiaNNSynFileColumns.PrecursorMZ,
        DiaNNSynFileColumns.DelM,
        DiaNNSynFileColumns.DelM_PPM,
        DiaNNSynFileColumns.Peptide,
        DiaNNSynFileColumns.Protein,
        DiaNNSynFileColumns.AdditionalProteins,
        DiaNNSynFileColumns.RankEValue,
    }

    assert len(DIANN_SCORE_COLUMNS) == 17
    assert parsed.isdisjoint(DIANN_SCORE_COLUMNS)
    assert parsed | set(DIANN_SCORE_COLUMNS) == set(DiaNNSynFileColumns)
