"""API and domain data models."""
