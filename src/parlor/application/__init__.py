"""Application-level orchestration for Parlor."""
