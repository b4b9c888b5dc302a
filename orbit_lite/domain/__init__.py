"""Occurrence, status and view-building logic for orbit_lite."""
