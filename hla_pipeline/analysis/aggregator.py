# hla_pipeline/analysis/aggregator.py

import logging
from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Sequence

from hla_pipeline.analysis.metrics.base import BaseDistanceMetric
from hla_pipeline.analysis.metrics.hamming import ALLELE_INDICES, HammingDistanceMetric
from hla_pipeline.errors import InputCardinalityError
from hla_pipeline.models.allele import AlleleRecord
from hla_pipeline.models.distance import PairDistanceResult

logger = logging.getLogger(__name__)


class GenePairAggregator:
    """
    Sums per-gene distances for one sample pair over the genes both samples
    have fully typed (alleles 1 and 2, one record each).
    """

    def __init__(self, metric: Optional[BaseDistanceMetric] = None, genes: Optional[Iterable[str]] = None):
        self.metric = metric or HammingDistanceMetric()
        self.genes = set(genes) if genes is not None else None

    def aggregate(self, records: Sequence[AlleleRecord], row: int = 0, col: int = 1) -> PairDistanceResult:
        samples = list(dict.fromkeys(r.sample_name for r in records))
        if len(samples) != 2:
            raise InputCardinalityError(f"A sample pair needs exactly 2 samples, got {len(samples)}: {samples}")
        sample_a, sample_b = samples

        by_gene: Dict[str, Dict[str, List[AlleleRecord]]] = defaultdict(lambda: defaultdict(list))
        for r in records:
            by_gene[r.gene_name][r.sample_name].append(r)

        result = PairDistanceResult(sample_a=sample_a, sample_b=sample_b, row=row, col=col)
        for gene_name in sorted(by_gene):
            if self.genes is not None and gene_name not in self.genes:
                continue

            per_sample = by_gene[gene_name]
            if not all(self._fully_typed(per_sample.get(s, [])) for s in samples):
                logger.debug(f"{sample_a} vs {sample_b}: {gene_name} not typed with 2 alleles in both samples; excluded.")
                continue

            gene_result = self.metric.resolve(per_sample[sample_a] + per_sample[sample_b])
            result.genes.append(gene_result)
            result.total_distance += gene_result.distance

        return result

    @staticmethod
    def _fully_typed(records: List[AlleleRecord]) -> bool:
        return tuple(sorted(r.allele_name for r in records)) == ALLELE_INDICES
