"""
Signpost package root.

On-screen message coordination for tile games: a scrollback message log, a
single shared overlay slot arbitrated between signs, NPC chatter and generic
toasts, and timed notifications (region banners, note cards). Rendering is kept
behind a key-addressed presentation surface so the core stays engine-agnostic.
"""

__version__ = "0.1.0"

__all__ = [
    "__version__",
]
