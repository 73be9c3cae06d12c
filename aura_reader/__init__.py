"""aura_reader: Aura photo analysis: dominant colours, chakra palette, reading, glow overlay."""

__version__ = '0.1.0'
