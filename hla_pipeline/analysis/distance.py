# hla_pipeline/analysis/distance.py

from hla_pipeline.analysis.aggregator import GenePairAggregator
from hla_pipeline.analysis.config import DistanceConfig
from hla_pipeline.analysis.matrix import DistanceMatrixBuilder
from hla_pipeline.analysis.metrics.base import BaseDistanceMetric
from hla_pipeline.analysis.metrics.hamming import HammingDistanceMetric
from hla_pipeline.errors import InputCardinalityError, ValidationError
from hla_pipeline.models.allele import AlleleRecord
from hla_pipeline.models.dataset import HLADataset
from hla_pipeline.models.distance import PairDistanceResult, PairOutcome, PairSkip
from hla_pipeline.models.metric import MetricResult
from collections import defaultdict
from typing import Dict, Iterator, List, Optional, Tuple
import itertools
import logging

logger = logging.getLogger(__name__)

# Metric registry
DISTANCE_REGISTRY = {
    "hamming": HammingDistanceMetric,
}

class PairwiseDistanceEngine:
    """
    Computes the per-pair distance for every unordered sample pair of a
    dataset and assembles the sample-by-sample matrix.

    Pairs are enumerated in canonical order: samples by first appearance,
    taken two at a time, first sample fixed while the second advances. Each
    pair is given its matrix cell when it is enumerated.
    """

    def __init__(self, dataset: HLADataset, config: Optional[DistanceConfig] = None):
        if not isinstance(dataset, HLADataset):
            raise ValidationError("hla_data must be of class \"HLADataset\"")

        self.dataset = dataset
        self.config = config or DistanceConfig()
        self.samples = dataset.samples
        self.debug_logs: List[str] = []

        self._records: Dict[str, List[AlleleRecord]] = defaultdict(list)
        for record in dataset.records():
            self._records[record.sample_name].append(record)

    def compute(self) -> MetricResult:
        if len(self.samples) < 2:
            raise ValidationError("hla_data must contain information for at least 2 samples")

        metric = self._get_metric()
        aggregator = GenePairAggregator(metric, genes=self.config.genes)

        outcomes = [self.compute_pair(aggregator, *pair) for pair in self.enumerate_pairs()]
        pairs = [o for o in outcomes if isinstance(o, PairDistanceResult)]
        skipped = [o for o in outcomes if isinstance(o, PairSkip)]

        for skip in skipped:
            logger.warning(f"Skipping {skip.sample_a} vs {skip.sample_b}: {skip.reason}")

        builder = DistanceMatrixBuilder(missing_value=self.config.missing_value)
        matrix = builder.build(self.samples, pairs)

        self.debug_logs = metric.get_logs()
        logger.info(
            f"Computed {metric.label} for {len(pairs)} of {len(outcomes)} sample pairs "
            f"across {len(self.samples)} samples."
        )
        return MetricResult(metric=metric.label, distance_matrix=matrix, pair_details=pairs, skipped=skipped)

    def enumerate_pairs(self) -> Iterator[Tuple[int, int, str, str]]:
        indexed = list(enumerate(self.samples))
        for (i, s1), (j, s2) in itertools.combinations(indexed, 2):
            yield i, j, s1, s2

    def compute_pair(self, aggregator: GenePairAggregator, row: int, col: int, s1: str, s2: str) -> PairOutcome:
        records = self._records.get(s1, []) + self._records.get(s2, [])

        try:
            result = aggregator.aggregate(records, row=row, col=col)
        except InputCardinalityError as e:
            return PairSkip(sample_a=s1, sample_b=s2, row=row, col=col, reason=str(e))

        if result.gene_count < self.config.min_shared_genes:
            return PairSkip(
                sample_a=s1, sample_b=s2, row=row, col=col,
                reason=f"{result.gene_count} shared typed gene(s), at least {self.config.min_shared_genes} required",
            )
        return result

    def _get_metric(self) -> BaseDistanceMetric:
        metric_cls = DISTANCE_REGISTRY.get(self.config.metric)
        if not metric_cls:
            raise ValueError(f"Unknown distance metric: {self.config.metric}")
        return metric_cls(debug=self.config.debug_mode)

    def get_debug_log(self) -> str:
        return "\n".join(self.debug_logs)


def calculate_hamming(hla_data: HLADataset, config: Optional[DistanceConfig] = None) -> MetricResult:
    """Hamming distance between all samples of an HLA dataset."""
    config = (config or DistanceConfig()).model_copy(update={"metric": "hamming"})
    return PairwiseDistanceEngine(hla_data, config).compute()
