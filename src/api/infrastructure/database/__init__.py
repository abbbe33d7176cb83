"""Database infrastructure - async engine, sessions and the declarative base."""
