"""User-facing interfaces (the command line)."""
