"""Report pipeline orchestration."""
