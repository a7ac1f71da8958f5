"""Extraction, filtering and scoring services."""
