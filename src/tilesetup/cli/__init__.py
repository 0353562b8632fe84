"""Command line interface for tile layout generation."""
