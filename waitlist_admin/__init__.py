"""
Top-level package for the waitlist admin dashboard.

This package exposes the core architecture (domain, services, UI adapters).
Most code should import from submodules such as:
    waitlist_admin.core
    waitlist_admin.services
    waitlist_admin.ui
"""

__all__: list[str] = []
