"""Infrastructure layer for the authoring context."""
