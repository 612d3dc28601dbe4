"""Data models for check results."""
