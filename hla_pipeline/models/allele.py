# hla_pipeline/models/allele.py

from dataclasses import dataclass
from typing import Any, Dict, Union

SAMPLE_NAME = "SampleName"
GENE_NAME = "GeneName"
ALLELE_NAME = "AlleleName"
ALLELE_GROUP = "AlleleGroup"

REQUIRED_COLUMNS = (SAMPLE_NAME, GENE_NAME, ALLELE_NAME, ALLELE_GROUP)


@dataclass(frozen=True)
class AlleleRecord:
    """One typed allele copy (1 or 2) of one gene for one sample."""
    sample_name: str
    gene_name: str
    allele_name: int
    allele_group: Union[str, int]

    def to_dict(self) -> Dict[str, Any]:
        return {
            SAMPLE_NAME: self.sample_name,
            GENE_NAME: self.gene_name,
            ALLELE_NAME: self.allele_name,
            ALLELE_GROUP: self.allele_group,
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "AlleleRecord":
        return AlleleRecord(
            sample_name=str(data[SAMPLE_NAME]),
            gene_name=str(data[GENE_NAME]),
            allele_name=int(data[ALLELE_NAME]),
            allele_group=data[ALLELE_GROUP],
        )
