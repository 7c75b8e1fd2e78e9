"""
Passerelle - Solana / Midnight bridge service.

Builds and submits native transfers on the source chain, normalizes
wallet signing replies, and records bridge intents.
"""

__version__ = "0.1.0"
