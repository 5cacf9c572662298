"""Micropost: a small social posting API with JWT auth and role-based access."""
