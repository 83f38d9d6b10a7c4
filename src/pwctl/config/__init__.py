"""Configuration layer — TOML discovery, section models, settings, logging."""
