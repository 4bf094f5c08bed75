"""Command groups for the taskboard CLI."""
