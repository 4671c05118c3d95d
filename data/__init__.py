"""Synthetic data generators for ForecastLens."""
