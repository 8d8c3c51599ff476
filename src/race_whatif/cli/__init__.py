"""Command-line interface for race-whatif."""
