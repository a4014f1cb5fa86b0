"""Command line interface for Mass Commit."""
