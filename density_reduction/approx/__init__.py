"""Quantile-grid approximation and binning of sample sets."""
