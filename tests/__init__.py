"""
Tests for the WoW combat log reader.

This package contains tests for:
- Quote-aware line splitting and line decomposition
- Synchronous, push-based and asyncio streaming reads
- Settings, YAML configuration and the command-line interface
"""
