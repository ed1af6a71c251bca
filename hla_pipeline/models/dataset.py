# hla_pipeline/models/dataset.py

import logging
from typing import Iterable, Iterator, List, Sequence

import pandas as pd

from hla_pipeline.errors import ValidationError
from hla_pipeline.models.allele import (
    ALLELE_GROUP,
    ALLELE_NAME,
    GENE_NAME,
    REQUIRED_COLUMNS,
    SAMPLE_NAME,
    AlleleRecord,
)

logger = logging.getLogger(__name__)


class HLADataset:
    """
    Typed HLA allele table: one row per (SampleName, GeneName, AlleleName)
    with the typed AlleleGroup. Only the four required columns are kept.
    Sample order is the order of first appearance in the table.
    """

    def __init__(self, data: pd.DataFrame):
        if data is None:
            raise ValidationError("An entry called \"data\" is missing from the HLA dataset.")
        if not isinstance(data, pd.DataFrame):
            raise ValidationError(f"HLA data must be a pandas DataFrame, got {type(data).__name__}.")

        missing = [c for c in REQUIRED_COLUMNS if c not in data.columns]
        if missing:
            raise ValidationError(f"HLA data is missing required column(s): {', '.join(missing)}")

        df = data.loc[:, list(REQUIRED_COLUMNS)].copy()

        if df[[SAMPLE_NAME, GENE_NAME, ALLELE_NAME]].isnull().values.any():
            raise ValidationError("SampleName, GeneName and AlleleName must not contain missing values.")

        untyped = df[ALLELE_GROUP].isnull()
        if untyped.any():
            logger.warning(f"Dropping {int(untyped.sum())} allele record(s) without an AlleleGroup.")
            df = df[~untyped].copy()

        allele_index = pd.to_numeric(df[ALLELE_NAME], errors="coerce")
        bad = allele_index.isnull() | (allele_index % 1 != 0)
        if bad.any():
            values = df.loc[bad, ALLELE_NAME].unique().tolist()
            raise ValidationError(f"AlleleName must be an integer allele index, got {values}")
        df[ALLELE_NAME] = allele_index.astype(int)

        df[SAMPLE_NAME] = df[SAMPLE_NAME].astype(str)
        df[GENE_NAME] = df[GENE_NAME].astype(str)
        self.data = df.reset_index(drop=True)

    @classmethod
    def from_records(cls, records: Iterable[AlleleRecord]) -> "HLADataset":
        rows = [r.to_dict() for r in records]
        return cls(pd.DataFrame(rows, columns=list(REQUIRED_COLUMNS)))

    @property
    def samples(self) -> List[str]:
        return list(pd.unique(self.data[SAMPLE_NAME]))

    @property
    def genes(self) -> List[str]:
        return sorted(pd.unique(self.data[GENE_NAME]))

    def __len__(self) -> int:
        return len(self.data)

    def records(self) -> Iterator[AlleleRecord]:
        for row in self.data.itertuples(index=False):
            yield AlleleRecord(
                sample_name=getattr(row, SAMPLE_NAME),
                gene_name=getattr(row, GENE_NAME),
                allele_name=int(getattr(row, ALLELE_NAME)),
                allele_group=getattr(row, ALLELE_GROUP),
            )

    def subset(self, samples: Sequence[str]) -> "HLADataset":
        return HLADataset(self.data[self.data[SAMPLE_NAME].isin(samples)])

    def __repr__(self) -> str:
        return f"HLADataset(samples={len(self.samples)}, genes={len(self.genes)}, records={len(self)})"
