"""Core types for DTOFORGE: IR, configuration, naming and errors."""
