"""Mini README: Interactive interfaces for Angkringan POS.

Exports the FastAPI application factory behind the cashier screens. The
Typer CLI lives in ``main_cashier.py`` at the repository root.
"""

from .web_app import create_application

__all__ = ["create_application"]
