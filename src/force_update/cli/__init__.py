"""Command-line interface for force_update."""
