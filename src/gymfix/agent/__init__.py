"""AI repair advisor."""
