"""
Configuration Module
====================

Centralized configuration management using Pydantic Settings.
Loads from environment variables with type validation and defaults.

Usage:
    from shared.config import settings

    print(settings.environment)
    print(settings.neo4j.uri)
"""

from shared.config.settings import (
    Settings,
    Neo4jSettings,
    get_settings,
    Environment,
    LogLevel,
)


# Global settings instance (singleton)
settings = get_settings()

__all__ = [
    "Settings",
    "Neo4jSettings",
    "get_settings",
    "settings",
    "Environment",
    "LogLevel",
]
