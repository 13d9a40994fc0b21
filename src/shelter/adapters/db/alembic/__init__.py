"""Alembic migration environment and revision scripts for SHELTER's store."""
