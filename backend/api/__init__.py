"""
To-do API package.

Provides the FastAPI application; import it from api.app.
"""
