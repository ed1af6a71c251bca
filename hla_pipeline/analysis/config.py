# hla_pipeline/analysis/config.py

import math
from pydantic import BaseModel, Field, model_validator
from typing import List, Literal, Optional

class DistanceConfig(BaseModel):
    metric: Literal["hamming"] = "hamming"
    min_shared_genes: int = Field(1, ge=0)
    genes: Optional[List[str]] = None
    missing_value: float = math.nan
    debug_mode: bool = False

    @model_validator(mode="after")
    def validate_genes(self) -> "DistanceConfig":
        if self.genes is not None and not self.genes:
            raise ValueError("genes must name at least one gene, or be left unset to use all genes.")
        return self
