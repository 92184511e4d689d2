"""Command implementations for the stagedfmt CLI."""
