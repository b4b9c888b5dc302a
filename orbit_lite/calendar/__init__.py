"""Calendar data models and date helpers for orbit_lite."""
