"""API Gateway routing for the user administration Lambda."""
