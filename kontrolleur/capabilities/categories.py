"""
Capability categories and per-import classification status.
"""

from enum import Enum


class CapabilityCategory(str, Enum):
    """Class of system resource a host import exposes."""
    FILESYSTEM = "filesystem"
    CLOCK = "clock"
    RANDOMNESS = "randomness"
    ENVIRONMENT = "environment"
    ARGUMENTS = "arguments"
    POLLING = "polling"
    NETWORKING = "networking"
    PROCESS_CONTROL = "process_control"
    MEMORY = "memory"
    UNKNOWN = "unknown"

    @property
    def label(self) -> str:
        """Human readable name used in reports."""
        return _LABELS[self]


_LABELS = {
    CapabilityCategory.FILESYSTEM: "file system",
    CapabilityCategory.CLOCK: "clock",
    CapabilityCategory.RANDOMNESS: "randomness",
    CapabilityCategory.ENVIRONMENT: "environment",
    CapabilityCategory.ARGUMENTS: "arguments",
    CapabilityCategory.POLLING: "polling",
    CapabilityCategory.NETWORKING: "networking",
    CapabilityCategory.PROCESS_CONTROL: "process control",
    CapabilityCategory.MEMORY: "memory",
    CapabilityCategory.UNKNOWN: "unknown",
}


class ImportStatus(str, Enum):
    """How an import relates to the recognized WASI namespaces."""
    WASI = "wasi"
    UNKNOWN_WASI = "unknown"
    NON_WASI = "non-wasi"
