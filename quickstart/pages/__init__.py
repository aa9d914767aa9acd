"""
Pages Package

Server-rendered pages sharing one layout.

Modules:
- layout: Page shell, navigation and login display
- routes: Home, profile and fetch data pages
"""

from .routes import pages_router

__all__ = [
    "pages_router",
]
