"""
Configuration Module
====================

Centralized configuration management using Pydantic Settings.
Loads from environment variables with type validation and defaults.

Usage:
    from blockcreds.config import settings

    print(settings.environment)
    print(settings.zk.artifact_dir)
"""

from blockcreds.config.settings import (
    ArtifactSource,
    BlockchainMode,
    BlockchainSettings,
    Environment,
    LogLevel,
    Settings,
    VerifierBackend,
    ZKSettings,
    get_settings,
)


# Global settings instance (singleton)
settings = get_settings()

__all__ = [
    "Settings",
    "ZKSettings",
    "get_settings",
    "settings",
    "Environment",
    "LogLevel",
    "BlockchainMode",
    "BlockchainSettings",
    "ArtifactSource",
    "VerifierBackend",
]
