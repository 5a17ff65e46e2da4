"""Role-based store rating service."""
