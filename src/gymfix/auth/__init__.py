"""Session, permission gate and user accounts."""
