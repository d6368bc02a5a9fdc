"""
Capture package for the cart suite.
Handles page screenshots for failure evidence and scenario checkpoints.
"""

from .screenshot import CaptureResult, ScreenshotManager

__all__ = [
    "CaptureResult",
    "ScreenshotManager",
]
