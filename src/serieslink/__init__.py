"""serieslink - keep series navigation blocks in published articles current."""

__version__ = "0.3.0"
