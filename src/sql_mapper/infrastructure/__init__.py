"""Infrastructure layer: schema extraction and SQL generation."""
