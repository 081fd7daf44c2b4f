"""Cross-cutting platform pieces: configuration and error handling."""
