"""Cancellation parts; import from ``mugin_providers.base.cancellation``."""
