# hla_pipeline/analysis/metrics/hamming.py

from hla_pipeline.analysis.metrics.base import BaseDistanceMetric
from hla_pipeline.errors import InputShapeError
from hla_pipeline.models.allele import AlleleRecord
from hla_pipeline.models.distance import GeneDistanceResult, Pairing
from typing import Dict, List, Sequence, Tuple

ALLELE_INDICES = (1, 2)

class HammingDistanceMetric(BaseDistanceMetric):
    """
    Minimal allele mismatch count between two samples at one gene:

        min(s1A1 != s2A1 + s1A2 != s2A2,  s1A1 != s2A2 + s1A2 != s2A1)

    The first sum is the same-index pairing, the second the crossed-index
    pairing. When both sums are equal the pairing is reported as ambiguous.
    """
    name = "hamming"
    label = "Hamming Distance"

    def resolve(self, records: Sequence[AlleleRecord]) -> GeneDistanceResult:
        gene_name, (s1, s2) = self._split(records)

        same = int(s1[1] != s2[1]) + int(s1[2] != s2[2])
        crossed = int(s1[1] != s2[2]) + int(s1[2] != s2[1])

        if same < crossed:
            pairing = Pairing.SAME_INDEX
        elif crossed < same:
            pairing = Pairing.CROSSED_INDEX
        else:
            pairing = Pairing.AMBIGUOUS

        distance = min(same, crossed)
        self.log(f"{gene_name}: same={same}, crossed={crossed} -> {distance} ({pairing.value})")
        return GeneDistanceResult(gene_name=gene_name, distance=distance, pairing=pairing)

    def _split(self, records: Sequence[AlleleRecord]) -> Tuple[str, List[Dict[int, object]]]:
        if len(records) != 4:
            raise InputShapeError(f"Expected 4 allele records (2 samples x 2 alleles), got {len(records)}.")

        genes = {r.gene_name for r in records}
        if len(genes) != 1:
            raise InputShapeError(f"Allele records span more than one gene: {sorted(genes)}")
        gene_name = records[0].gene_name

        by_sample: Dict[str, Dict[int, object]] = {}
        for r in records:
            alleles = by_sample.setdefault(r.sample_name, {})
            if r.allele_name in alleles:
                raise InputShapeError(f"{gene_name}: allele {r.allele_name} given twice for sample '{r.sample_name}'.")
            alleles[r.allele_name] = r.allele_group

        if len(by_sample) != 2:
            raise InputShapeError(f"{gene_name}: expected 2 samples, got {len(by_sample)}.")
        for sample, alleles in by_sample.items():
            if tuple(sorted(alleles)) != ALLELE_INDICES:
                raise InputShapeError(f"{gene_name}: sample '{sample}' must have alleles 1 and 2, got {sorted(alleles)}.")

        return gene_name, list(by_sample.values())
