"""Settings, errors, logging and metrics."""
