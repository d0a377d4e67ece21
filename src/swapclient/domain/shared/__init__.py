"""Shared domain contracts.

This package is domain-accessible and should not depend on infrastructure code.
"""

from .swap_server_client_protocol import SwapServerClientProtocol

__all__ = ["SwapServerClientProtocol"]
