"""Data models for tracks, labels, media information and releases."""
