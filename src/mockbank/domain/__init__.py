"""Domain layer: error taxonomy and shared utilities."""
