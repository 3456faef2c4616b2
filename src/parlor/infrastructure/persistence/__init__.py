"""Persistence layer: engine, sessions, models and repositories."""
