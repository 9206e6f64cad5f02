"""A small file archiver with optional LZ77 compression of members."""

__version__ = "0.1.0"
__all__ = ["lz", "lista", "membro", "archive", "actions", "cli"]