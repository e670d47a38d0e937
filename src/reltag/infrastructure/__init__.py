"""Infrastructure layer — tag sources and ref writers for real repositories."""
