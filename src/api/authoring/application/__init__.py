"""Application layer for the authoring context."""
