"""
kontrolleur
Inspects what a WebAssembly binary assumes about its host environment.

Reports whether a module targets a WASI runtime and which classes of system
resources (file system, clock, randomness, environment, networking, process
control) its imports ask for.
"""

__version__ = "0.1.0"

from .config import Config
from .errors import DecodeError
from .inspector import inspect
from .output.report import Report

__all__ = ['Config', 'DecodeError', 'Report', 'inspect', '__version__']
