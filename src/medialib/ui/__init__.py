"""Headless UI state for the library screen."""
