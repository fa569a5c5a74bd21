"""
Binary format decoders.

Supports:
- WebAssembly (MVP binary format, version 1)
"""

from .wasm import WasmModuleDecoder, DecodedModule, decode_module
from .wasm_structures import *

__all__ = ['WasmModuleDecoder', 'DecodedModule', 'decode_module']
