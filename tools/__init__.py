"""Command-line tools for Flappy Bard."""
