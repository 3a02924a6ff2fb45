"""Framework wiring: configuration, extensions, logging and error handling."""
