"""Inbound webhook resources.

Usage
-----
Import the Typeform resource for route registration::

    from formgate.api.webhooks.resources import TypeformWebhookResource
"""
