from .repos import ChatConfigNotFound, IChatConfigStore

__all__ = ["ChatConfigNotFound", "IChatConfigStore"]
