"""Core primitives: configuration, errors, result values, startup."""
