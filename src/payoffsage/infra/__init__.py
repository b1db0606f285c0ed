"""Storage boundary: database engine and repositories."""
