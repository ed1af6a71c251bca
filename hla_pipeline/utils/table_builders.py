# hla_pipeline/utils/table_builders

import pandas as pd
from typing import Iterable
from hla_pipeline.models.distance import PairDistanceResult

ALLELE_INFO_COLUMNS = [
    "SampleName1", "SampleName2", "GeneName", "distance", "same_allele", "pairing", "HammingDistance",
]
PAIR_SUMMARY_COLUMNS = ["SampleName1", "SampleName2", "HammingDistance", "SharedGenes", "AmbiguousGenes"]

def build_allele_info_df(pairs: Iterable[PairDistanceResult]) -> pd.DataFrame:
    rows = []

    for pair in pairs:
        for gene in pair.genes:
            rows.append({
                "SampleName1": pair.sample_a,
                "SampleName2": pair.sample_b,
                "GeneName": gene.gene_name,
                "distance": gene.distance,
                "same_allele": gene.pairing.same_allele,
                "pairing": gene.pairing.value,
                "HammingDistance": pair.total_distance,
            })

    return pd.DataFrame(rows, columns=ALLELE_INFO_COLUMNS)

def build_pair_summary_df(pairs: Iterable[PairDistanceResult]) -> pd.DataFrame:
    rows = [{
        "SampleName1": pair.sample_a,
        "SampleName2": pair.sample_b,
        "HammingDistance": pair.total_distance,
        "SharedGenes": pair.gene_count,
        "AmbiguousGenes": sum(1 for g in pair.genes if g.ambiguous),
    } for pair in pairs]

    return pd.DataFrame(rows, columns=PAIR_SUMMARY_COLUMNS)
