"""formgate HTTP API layer.

This package provides the Falcon Asynchronous Server Gateway Interface
(ASGI) application that receives Typeform webhooks and serves probe
endpoints.

Usage
-----
Create the application::

    from formgate.api import create_app

    app = create_app()              # probes only
    app = create_app(dependencies)  # probes plus POST /webhooks/typeform
"""

from formgate.api.app import AppDependencies, create_app

__all__ = ["AppDependencies", "create_app"]
