"""idk core modules."""
