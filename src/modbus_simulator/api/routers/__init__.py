"""API routers, mounted under /api by the application factory."""
