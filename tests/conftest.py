import pandas as pd
import pytest

from hla_pipeline.models.allele import AlleleRecord
from hla_pipeline.models.dataset import HLADataset


def typed(sample, genes):
    """AlleleRecords for one sample from {gene: (allele1, allele2)}."""
    records = []
    for gene, (a1, a2) in genes.items():
        records.append(AlleleRecord(sample, gene, 1, a1))
        records.append(AlleleRecord(sample, gene, 2, a2))
    return records


@pytest.fixture
def demo_dataset():
    rows = []
    for sample, genes in {
        "ERR053": {"A": ("01", "02"), "B": ("07", "08"), "C": ("03", "04")},
        "ERR465": {"A": ("02", "01"), "B": ("07", "44"), "C": ("05", "06")},
        "ERR040": {"A": ("01", "03"), "B": ("08", "07"), "C": ("03", "03")},
    }.items():
        for gene, (a1, a2) in genes.items():
            rows.append({"SampleName": sample, "GeneName": gene, "AlleleName": 1, "AlleleGroup": a1})
            rows.append({"SampleName": sample, "GeneName": gene, "AlleleName": 2, "AlleleGroup": a2})
    return HLADataset(pd.DataFrame(rows))
