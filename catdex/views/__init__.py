"""View rendering module for HTML templates and static assets.

This module handles template loading and rendering, separate from the routers.
"""
