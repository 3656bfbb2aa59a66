from __future__ import annotations


class ModelConfigurationError(RuntimeError):
    """Model credentials are missing; raised before any network call."""


class ModelGatewayError(RuntimeError):
    """The model API call failed. The message embeds the upstream error text."""
