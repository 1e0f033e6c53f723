"""
storyfacts - synthetic narrative-reasoning story generation.

Stories are sequences of world events; a temporal knowledge store tracks
what is known after every event so questions can be answered together
with the events that support them.
"""

__version__ = "0.3.0"
