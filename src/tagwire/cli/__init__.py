"""Command-line tools for tagwire."""
