"""API layer - HTTP routes, session resolution and middleware."""
