"""Sample sources: synthetic generation and file I/O."""
