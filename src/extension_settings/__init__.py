"""Terminal settings menu for extensions.

Extensions register setting definitions with a SettingsManager; the
settings menu lets a user browse and edit them in the terminal.
"""

__version__ = "0.1.0"
