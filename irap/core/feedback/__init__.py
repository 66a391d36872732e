"""Feedback parsing, normalization and aggregation."""
