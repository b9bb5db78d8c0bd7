"""Fuzzy tip rules, a numpy network trained to reproduce them, plots and a command line."""

__version__ = "0.1.0"
__all__ = ["rules", "dataset", "network", "trainer", "history", "plots", "cli"]