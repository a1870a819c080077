"""Persistence and seed data."""
