"""jtts - Japanese multi-voice text-to-speech proxy and batch client."""

__version__ = "0.1.0"
