"""Service integrations for the user administration Lambda."""
