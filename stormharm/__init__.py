"""
STORMHARM package
=================

Storm harm analysis over the NOAA storm database.

- The CLI entry point is in `stormharm/cli.py`.
- The analysis pipeline (health / economic impact) is in `stormharm/engine.py`.
- Damage exponent decoding and normalization are in `stormharm/damage.py`.
- Dataset loading is in `stormharm/loader.py`.
"""

__version__ = '0.1.0'
