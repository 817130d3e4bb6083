"""Modal, keystroke-driven text editing core."""

__all__ = [
    "actions",
    "adapters",
    "buffer",
    "config",
    "keymaps",
    "modes",
    "runtime",
    "session",
    "view",
]

__version__ = "0.1.0"
