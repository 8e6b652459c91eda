"""Settings, TOML discovery, and logging configuration."""
