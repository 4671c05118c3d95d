"""Streamlit front end for ForecastLens."""

from .main import main

__all__ = ["main"]
