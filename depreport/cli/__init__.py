"""Command implementations for the depreport CLI."""
