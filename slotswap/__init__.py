"""SlotSwap: peer-to-peer calendar slot swapping."""

__version__ = "0.1.0"
