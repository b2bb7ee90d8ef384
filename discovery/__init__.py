"""
Discovery module - Gathers context about the host and the editor.

Components:
- resolve_platform: maps the OS to editor paths and shell conventions
- SystemScanner: reports platform, CPU and editor version
"""

from .platform import OSFamily, PlatformProfile, resolve_platform
from .system import SystemInfo, SystemScanner

__all__ = ["OSFamily", "PlatformProfile", "resolve_platform", "SystemInfo", "SystemScanner"]
