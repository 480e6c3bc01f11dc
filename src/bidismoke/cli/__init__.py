"""Command-line interface for bidismoke."""
