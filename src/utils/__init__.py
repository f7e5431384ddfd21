"""Utility helpers shared across services and API endpoints."""
