# hla_pipeline/models/distance.py

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from hla_pipeline.errors import ValidationError


class Pairing(Enum):
    """Which cross-sample allele pairing produced the minimal distance."""
    SAME_INDEX = "same_index"
    CROSSED_INDEX = "crossed_index"
    AMBIGUOUS = "ambiguous"

    @property
    def same_allele(self) -> Optional[bool]:
        # None when both pairings tie
        if self is Pairing.AMBIGUOUS:
            return None
        return self is Pairing.SAME_INDEX


@dataclass
class GeneDistanceResult:
    gene_name: str
    distance: int
    pairing: Pairing

    @property
    def ambiguous(self) -> bool:
        return self.pairing is Pairing.AMBIGUOUS

    def to_dict(self) -> dict:
        return {
            "gene_name": self.gene_name,
            "distance": int(self.distance),
            "pairing": self.pairing.value,
            "same_allele": self.pairing.same_allele,
        }


@dataclass
class PairDistanceResult:
    """Total distance of one sample pair, with its cell in the final matrix."""
    sample_a: str
    sample_b: str
    row: int
    col: int
    total_distance: int = 0
    genes: List[GeneDistanceResult] = field(default_factory=list)

    def __post_init__(self):
        if self.sample_a == self.sample_b:
            raise ValidationError(f"A sample pair needs two distinct samples, got '{self.sample_a}' twice.")

    @property
    def gene_count(self) -> int:
        return len(self.genes)

    def gene(self, gene_name: str) -> Optional[GeneDistanceResult]:
        return next((g for g in self.genes if g.gene_name == gene_name), None)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sample_a": self.sample_a,
            "sample_b": self.sample_b,
            "row": self.row,
            "col": self.col,
            "total_distance": int(self.total_distance),
            "genes": [g.to_dict() for g in self.genes],
        }


@dataclass
class PairSkip:
    """A sample pair left out of the metric, and why."""
    sample_a: str
    sample_b: str
    row: int
    col: int
    reason: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sample_a": self.sample_a,
            "sample_b": self.sample_b,
            "row": self.row,
            "col": self.col,
            "reason": self.reason,
        }


PairOutcome = Union[PairDistanceResult, PairSkip]
