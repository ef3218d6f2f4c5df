"""Centralized error handling."""
