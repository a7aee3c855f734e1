"""Infrastructure — database sessions, structured logging, token verification."""
