"""HTTP API shell: app factory, middleware, health routes."""
