"""Persistence layer: engine/session wiring, ORM models, schemas and repositories."""
