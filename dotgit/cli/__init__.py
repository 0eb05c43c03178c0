"""Command-line interface for dotgit."""
