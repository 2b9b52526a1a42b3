"""Background workers for the report service."""
