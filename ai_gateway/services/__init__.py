"""Gateway services: credential resolution, generation and verification."""
