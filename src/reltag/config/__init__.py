"""Configuration — settings, discovery, release-line file, logging."""
