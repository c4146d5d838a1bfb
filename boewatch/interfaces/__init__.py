"""User-facing interfaces of boewatch."""
