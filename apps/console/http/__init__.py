"""HTTP layer: blueprints, handlers and response middleware."""
