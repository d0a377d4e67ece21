"""Test fixtures for swap server client tests."""

from .fake_swap_server import FakeSwapServer, generate_compressed_key

__all__ = ["FakeSwapServer", "generate_compressed_key"]
