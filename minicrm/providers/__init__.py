"""External AI providers."""
