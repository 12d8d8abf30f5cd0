"""Ingestion and query of nginx access logs."""
