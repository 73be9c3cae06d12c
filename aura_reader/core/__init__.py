"""aura_reader.core: Foundation layer.

Contains the chakra palette, type definitions, image codec, colour
extraction, palette mapping, reading templates, the overlay compositor and
the report builder. This module has NO dependencies on
aura_reader.commands or aura_reader.registry.
Only stdlib, numpy, and PIL are allowed here.
"""
