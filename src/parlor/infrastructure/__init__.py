"""Infrastructure adapters for Parlor."""
