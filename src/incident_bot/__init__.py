"""Incident Bot: Slack incident channel provisioning service."""

__version__ = "0.1.0"
