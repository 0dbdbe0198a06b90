"""linkalias: short, unique aliases for arbitrary target URLs."""

__version__ = '0.1.0'
