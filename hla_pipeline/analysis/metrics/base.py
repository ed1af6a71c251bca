# hla_pipeline/analysis/metrics/base.py

from abc import ABC, abstractmethod
from hla_pipeline.models.allele import AlleleRecord
from hla_pipeline.models.distance import GeneDistanceResult
from typing import List, Sequence

class BaseDistanceMetric(ABC):
    name: str
    label: str

    def __init__(self, debug: bool = False):
        self.debug = debug
        self.logs: List[str] = []

    @abstractmethod
    def resolve(self, records: Sequence[AlleleRecord]) -> GeneDistanceResult:
        """Distance between two samples at one gene, from its 4 allele records."""
        ...

    def log(self, msg: str):
        if self.debug:
            self.logs.append(msg)

    def get_logs(self):
        return self.logs
