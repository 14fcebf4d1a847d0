"""Service configuration (see config.settings)."""
