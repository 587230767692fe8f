"""Configuration: category palette and environment settings."""
