"""User Account Service.

Binding layer between HTTP transport and the account service:
- Login and registration
- Customers, addresses and payment cards (list, get, create, delete)
- Health of the service and its store

Usage:
    ./start_server.py  # From repo root
"""

from .server import app

__all__ = ['app']
