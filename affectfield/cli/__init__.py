"""Command-line interface for affectfield."""
