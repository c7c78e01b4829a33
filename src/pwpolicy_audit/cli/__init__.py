"""Command-line interface for pwpolicy-audit."""
