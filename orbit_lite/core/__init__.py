"""Configuration and clock services for orbit_lite."""
