"""Configuration loading (environment, .env and YAML sources)."""
