"""Command-line tools for transit."""
