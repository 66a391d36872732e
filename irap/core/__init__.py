"""Core pipeline: models, feedback processing, reporting and storage."""
