"""Device-side application layer: simulation providers and asset serving."""
