"""API routers, mounted under /api by hrms.main."""
