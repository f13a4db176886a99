"""Core module for configuration, exceptions, and structured logging.

Patterns applied:
- Pydantic Settings with SettingsConfigDict
- Custom namespaced exceptions
- One-time structlog configuration
"""
