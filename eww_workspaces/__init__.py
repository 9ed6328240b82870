"""
eww workspaces

Workspace indicator backend for eww status bars on sway and i3.
Renders ten workspace buttons for one monitor and keeps them in sync
with window manager events.
"""

__version__ = "1.0.0"
__author__ = "NixOS Configuration Team"
