"""File-backed storage for interview snapshots and exports."""
