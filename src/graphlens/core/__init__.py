"""Core types, results and persisted preferences."""
