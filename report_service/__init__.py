"""Report aggregation service."""
