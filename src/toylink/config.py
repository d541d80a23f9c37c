"""
toylink - Configuration
=======================

Linker configuration. Values come from:
- Default values (defined here)
- Environment variables
- Command-line options (applied by the CLI on top of the above)

The only machine parameter is the size of the target memory, which
bounds Absolute addresses during pass 2.
"""

from dataclasses import dataclass
import logging
import os

logger = logging.getLogger(__name__)

DEFAULT_MACHINE_MEMORY_SIZE = 200

MACHINE_SIZE_ENV = "TOYLINK_MACHINE_SIZE"


@dataclass
class LinkerConfig:
    """
    Configuration for a link run.

    Attributes:
        machine_memory_size: Number of addressable words on the target
            machine. Absolute operands at or above this value are replaced
            by zero during pass 2 (default: 200).
    """

    machine_memory_size: int = DEFAULT_MACHINE_MEMORY_SIZE

    @classmethod
    def from_env(cls) -> "LinkerConfig":
        """
        Create LinkerConfig from environment variables.

        Environment variables (all optional):
            TOYLINK_MACHINE_SIZE: Machine memory size (positive integer)

        Returns:
            LinkerConfig with values from environment variables
        """
        config = cls()

        if size := os.environ.get(MACHINE_SIZE_ENV):
            try:
                value = int(size)
            except ValueError:
                logger.warning(f"Ignoring {MACHINE_SIZE_ENV}={size!r}: not an integer")
            else:
                if value > 0:
                    config.machine_memory_size = value
                else:
                    logger.warning(f"Ignoring {MACHINE_SIZE_ENV}={size!r}: must be positive")

        return config
