"""
Configuration type definitions and exceptions for railmap.
"""

from dataclasses import dataclass
from typing import List


# Written to app/version when a settings store is first created
CONFIG_VERSION = "1.0"


class ConfigError(Exception):
    """Raised when configuration is invalid or cannot be accessed."""
    pass


@dataclass
class ValidationResult:
    """Result of configuration validation."""
    is_valid: bool
    errors: List[str]
    warnings: List[str]
