"""A small IRC server with channels, topics, invitations and channel modes."""

__version__ = "1.0.0"
__all__ = ["__version__"]