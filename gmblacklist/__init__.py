"""Player and IP ban lists with timed bans, ban commands and translated messages."""

__version__ = "1.0.0"
__all__ = ["__version__"]