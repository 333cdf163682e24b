"""
emulation_codegen — build-time generator for wreq-util emulation bindings.

Scans the wreq-util emulation table and emits TypeScript union types and a
Rust constant-array module from it.
"""

__version__ = "0.1.0"
GENERATOR_VERSION = "v0"
PACKAGE_NAME = "emulation_codegen"
SCHEMA_VERSION = "0.1"
