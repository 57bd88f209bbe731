"""PredSchema - canonical discovery schema for prediction-market venues."""

__version__ = "0.1.0"
