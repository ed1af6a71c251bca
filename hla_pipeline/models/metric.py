# hla_pipeline/models/metric.py

from dataclasses import dataclass, field
from typing import Any, Dict, List

import pandas as pd

from hla_pipeline.models.distance import PairDistanceResult, PairSkip
from hla_pipeline.models.matrix import DistanceMatrix
from hla_pipeline.utils.table_builders import build_allele_info_df, build_pair_summary_df


@dataclass
class MetricResult:
    """
    Output of a distance computation: the metric label, the sample-labelled
    distance matrix, and per-pair, per-gene detail for drill-down.
    """
    metric: str
    distance_matrix: DistanceMatrix
    pair_details: List[PairDistanceResult] = field(default_factory=list)
    skipped: List[PairSkip] = field(default_factory=list)

    @property
    def dist(self) -> pd.DataFrame:
        return self.distance_matrix.to_frame()

    @property
    def allele_info(self) -> pd.DataFrame:
        return build_allele_info_df(self.pair_details)

    @property
    def pair_summary(self) -> pd.DataFrame:
        return build_pair_summary_df(self.pair_details)

    @property
    def samples(self) -> List[str]:
        return list(self.distance_matrix.labels)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "metric": self.metric,
            "dist": self.distance_matrix.to_dict(),
            "pair_details": [p.to_dict() for p in self.pair_details],
            "skipped": [s.to_dict() for s in self.skipped],
        }

    @property
    def dict(self):
        return self.to_dict()
