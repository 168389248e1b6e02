"""KTelex — Telex Vietnamese input method for X11."""
