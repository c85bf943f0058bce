"""
FastAPI Todo Backend package.

The application lives in ``src.api.main`` (``app`` or ``create_app()``) and
is served by ``src.api.server:main``.
"""
