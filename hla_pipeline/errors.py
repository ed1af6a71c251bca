# hla_pipeline/errors.py


class HLAMetricError(Exception):
    """Base class for every error raised while computing an HLA metric."""


class ValidationError(HLAMetricError, ValueError):
    """Caller input does not have the required shape. Computation stops."""


class IncompleteMatrixError(ValidationError):
    """A flat pairwise sequence does not cover every sample pair."""


class InputShapeError(HLAMetricError):
    """A single-gene slice for a sample pair is not 2 samples x 2 alleles."""


class InputCardinalityError(HLAMetricError):
    """A sample-pair slice does not reference exactly two samples."""
