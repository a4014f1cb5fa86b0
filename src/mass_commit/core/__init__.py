"""Core pipeline for Mass Commit."""
