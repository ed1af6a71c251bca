# hla_pipeline/analysis/matrix.py

import itertools
import logging
import math
from typing import Iterable, Sequence

import numpy as np
import pandas as pd

from hla_pipeline.errors import IncompleteMatrixError, ValidationError
from hla_pipeline.models.distance import PairDistanceResult
from hla_pipeline.models.matrix import DistanceMatrix

logger = logging.getLogger(__name__)


class DistanceMatrixBuilder:
    def __init__(self, missing_value: float = math.nan):
        self.missing_value = missing_value

    def build(self, labels: Sequence[str], pairs: Iterable[PairDistanceResult]) -> DistanceMatrix:
        """
        Write each pair's total distance at its (row, col) cell and mirror it.
        Cells of pairs that are absent keep `missing_value`.
        """
        labels = tuple(labels)
        n = len(labels)
        values = self._blank(n, self.missing_value)
        filled = set()

        for pair in pairs:
            i, j = pair.row, pair.col
            if not (0 <= i < n and 0 <= j < n) or i == j:
                raise ValidationError(f"Pair {pair.sample_a}/{pair.sample_b} has invalid matrix cell ({i}, {j}) for {n} samples.")
            if (labels[i], labels[j]) != (pair.sample_a, pair.sample_b):
                raise ValidationError(
                    f"Pair {pair.sample_a}/{pair.sample_b} does not match matrix cell "
                    f"({i}, {j}) = {labels[i]}/{labels[j]}."
                )
            values[i, j] = values[j, i] = pair.total_distance
            filled.add((min(i, j), max(i, j)))

        missing = np.ones((n, n), dtype=bool)
        for i, j in filled:
            missing[i, j] = missing[j, i] = False

        n_missing = n * (n - 1) // 2 - len(filled)
        if n_missing:
            logger.info(f"{n_missing} of {n * (n - 1) // 2} sample pair(s) have no distance in the matrix.")
        return DistanceMatrix(labels=labels, values=values, missing=missing)

    def from_condensed(self, labels: Sequence[str], distances: Sequence[float]) -> DistanceMatrix:
        """
        Rebuild the square matrix from the flat upper triangle, listed row by
        row in canonical pair order. Row x starts at offset x*N - x*(x+1)/2.
        """
        labels = tuple(labels)
        n = len(labels)
        expected = n * (n - 1) // 2
        if len(distances) != expected:
            raise IncompleteMatrixError(
                f"{n} samples need {expected} pairwise distances, got {len(distances)}; "
                "the sequence has gaps and cannot be placed by position."
            )

        values = self._blank(n, 0.0)
        for x in range(n - 1):
            pos = x * n - x * (x + 1) // 2
            values[x, x + 1:] = distances[pos:pos + n - x - 1]
        values = np.triu(values) + np.triu(values, k=1).T
        return DistanceMatrix(labels=labels, values=values)

    def from_pair_table(
        self,
        df: pd.DataFrame,
        first: str = "SampleName1",
        second: str = "SampleName2",
        value: str = "HammingDistance",
    ) -> DistanceMatrix:
        """
        Rebuild the matrix from a canonical-order pair table. The sample count
        is the number of distinct first samples plus one, since the last
        sample never appears first.
        """
        if df.empty:
            raise ValidationError("Pair table is empty.")
        firsts = list(pd.unique(df[first]))
        labels = firsts + [df[second].iloc[-1]]
        if len(set(labels)) != len(labels):
            raise IncompleteMatrixError("Pair table is not in canonical pair order.")
        pairs = list(zip(df[first], df[second]))
        expected = list(itertools.combinations(labels, 2))
        if pairs != expected:
            raise IncompleteMatrixError(
                f"Pair table does not list every sample pair in canonical order: expected {expected}, got {pairs}."
            )
        return self.from_condensed(labels, df[value].astype(float).tolist())

    @staticmethod
    def _blank(n: int, fill: float) -> np.ndarray:
        values = np.full((n, n), fill, dtype=float)
        np.fill_diagonal(values, 0.0)
        return values
