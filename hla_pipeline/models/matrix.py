# hla_pipeline/models/matrix.py

from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np
import pandas as pd
from scipy.spatial.distance import squareform


@dataclass(frozen=True, eq=False)
class DistanceMatrix:
    """
    Symmetric sample-by-sample distance matrix. The diagonal is 0 and cells
    of pairs that could not be compared are flagged in `missing`, whatever
    value they hold (NaN unless a sentinel was asked for). The backing arrays
    are copies, read-only once the matrix is built.
    """
    labels: Tuple[str, ...]
    values: np.ndarray
    missing: Optional[np.ndarray] = None

    def __post_init__(self):
        n = len(self.labels)
        values = np.array(self.values, dtype=float)
        if values.shape != (n, n):
            raise ValueError(f"Matrix shape {values.shape} does not match {n} labels.")
        if len(set(self.labels)) != n:
            raise ValueError("Matrix labels must be unique.")

        missing = np.isnan(values) if self.missing is None else np.array(self.missing, dtype=bool)
        if missing.shape != (n, n):
            raise ValueError(f"Missing mask shape {missing.shape} does not match {n} labels.")
        missing = missing | missing.T
        np.fill_diagonal(missing, False)

        values.setflags(write=False)
        missing.setflags(write=False)
        object.__setattr__(self, "values", values)
        object.__setattr__(self, "missing", missing)

    @property
    def size(self) -> int:
        return len(self.labels)

    @property
    def is_complete(self) -> bool:
        return not bool(self.missing.any())

    def index_of(self, label: str) -> int:
        try:
            return self.labels.index(label)
        except ValueError:
            raise KeyError(f"Unknown sample: {label}") from None

    def distance(self, a: str, b: str) -> float:
        return float(self.values[self.index_of(a), self.index_of(b)])

    def missing_pairs(self) -> List[Tuple[str, str]]:
        rows, cols = np.where(np.triu(self.missing, k=1))
        return [(self.labels[i], self.labels[j]) for i, j in zip(rows, cols)]

    def to_condensed(self) -> np.ndarray:
        """Upper triangle in canonical pair order, as scipy linkage expects."""
        if not self.is_complete:
            raise ValueError(f"Cannot condense a matrix with missing pairs: {self.missing_pairs()}")
        return squareform(self.values, checks=False)

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(self.values.copy(), index=list(self.labels), columns=list(self.labels))

    def to_dict(self) -> dict:
        return {
            "labels": list(self.labels),
            "values": [
                [None if gap else float(v) for v, gap in zip(row, gaps)]
                for row, gaps in zip(self.values, self.missing)
            ],
        }

    @staticmethod
    def from_frame(df: pd.DataFrame) -> "DistanceMatrix":
        if list(df.index) != list(df.columns):
            raise ValueError("Row and column labels of a distance matrix must match.")
        return DistanceMatrix(labels=tuple(map(str, df.index)), values=df.to_numpy(dtype=float, copy=True))
