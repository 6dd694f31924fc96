"""Infrastructure layer - Host access and configuration."""
