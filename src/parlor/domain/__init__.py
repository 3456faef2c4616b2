"""Authorization domain: entities, schemas and services."""
