"""Game-history insights for MLB The Show online play."""
