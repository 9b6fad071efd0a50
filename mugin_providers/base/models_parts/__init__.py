"""Domain model parts; import from `mugin_providers.base.models` instead."""
