"""Persistence layer: chat-config store contract and implementations."""
