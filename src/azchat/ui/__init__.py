"""Terminal rendering for the azchat CLI."""
