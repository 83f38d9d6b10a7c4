"""Built-in plugins registered by the CLI at startup."""
