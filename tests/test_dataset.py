import logging

import pandas as pd
import pytest

from conftest import typed
from hla_pipeline.errors import ValidationError
from hla_pipeline.models.allele import AlleleRecord
from hla_pipeline.models.dataset import HLADataset


def frame(rows):
    return pd.DataFrame(rows, columns=["SampleName", "GeneName", "AlleleName", "AlleleGroup"])


def test_extra_columns_are_dropped():
    df = frame([["s1", "A", 1, "02"], ["s1", "A", 2, "03"]])
    df["Resolution"] = "2-digit"
    dataset = HLADataset(df)
    assert list(dataset.data.columns) == ["SampleName", "GeneName", "AlleleName", "AlleleGroup"]


def test_missing_column_raises():
    df = pd.DataFrame({"SampleName": ["s1"], "GeneName": ["A"], "AlleleName": [1]})
    with pytest.raises(ValidationError, match="AlleleGroup"):
        HLADataset(df)


def test_missing_data_raises():
    with pytest.raises(ValidationError, match="\"data\" is missing"):
        HLADataset(None)


def test_non_frame_raises():
    with pytest.raises(ValidationError):
        HLADataset([["s1", "A", 1, "02"]])


def test_null_identifiers_raise():
    with pytest.raises(ValidationError):
        HLADataset(frame([[None, "A", 1, "02"]]))


def test_non_integer_allele_name_raises():
    with pytest.raises(ValidationError, match="AlleleName"):
        HLADataset(frame([["s1", "A", "first", "02"]]))


@pytest.mark.parametrize("allele_name", [2.7, 1.5])
def test_fractional_allele_name_raises(allele_name):
    with pytest.raises(ValidationError, match="integer allele index"):
        HLADataset(frame([["s1", "A", 1, "02"], ["s1", "A", allele_name, "03"]]))


def test_untyped_alleles_dropped(caplog):
    df = frame([["s1", "A", 1, "02"], ["s1", "A", 2, None]])
    with caplog.at_level(logging.WARNING):
        dataset = HLADataset(df)
    assert len(dataset) == 1
    assert "without an AlleleGroup" in caplog.text


def test_samples_and_genes():
    dataset = HLADataset.from_records(
        typed("s2", {"B": (1, 2)}) + typed("s1", {"A": (1, 2), "DRB1": (3, 4)})
    )
    assert dataset.samples == ["s2", "s1"]
    assert dataset.genes == ["A", "B", "DRB1"]


def test_records_round_trip():
    records = typed("s1", {"A": ("02", "03")})
    dataset = HLADataset.from_records(records)
    assert list(dataset.records()) == records


def test_allele_name_coerced_to_int():
    dataset = HLADataset(frame([["s1", "A", 1.0, "02"], ["s1", "A", 2.0, "03"]]))
    assert [r.allele_name for r in dataset.records()] == [1, 2]


def test_subset():
    dataset = HLADataset.from_records(typed("s1", {"A": (1, 2)}) + typed("s2", {"A": (1, 2)}) + typed("s3", {"A": (1, 2)}))
    assert dataset.subset(["s3", "s1"]).samples == ["s1", "s3"]


def test_allele_record_dict_round_trip():
    record = AlleleRecord("s1", "A", 2, "02")
    assert record.to_dict() == {"SampleName": "s1", "GeneName": "A", "AlleleName": 2, "AlleleGroup": "02"}
    assert AlleleRecord.from_dict(record.to_dict()) == record
