"""Terminal SQL client editing engine."""

__all__ = [
    "adapters",
    "buffer",
    "connection",
    "editor",
    "keymaps",
    "runtime",
]

__version__ = "0.1.0"
