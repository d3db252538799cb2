"""Script workbench: highlighting, an in-memory editor, plugin-driven runs, output and update checks."""

__version__ = "0.1.0"
__all__ = [
    "app",
    "editor",
    "fileobject",
    "highlighter",
    "output",
    "plugins",
    "runner",
    "versioning",
    "workspace",
]