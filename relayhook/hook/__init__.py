"""
Relay Hook Module.

Pre-/post-swap hook that defers large swaps to an authorized off-chain
relayer which batches them, and attributes the relayer's execution back to
the original requester.

Components:
- RelayHook: Boundary adapter wiring the policy components to the host lifecycle
- decode_opt_in / encode_opt_in: Opaque hook-data payload codec

Usage:
    from relayhook.hook import RelayHook
    from relayhook.config.configs import HookConfig

    hook = RelayHook(HookConfig(owner="0xowner"))
    hook.subscribe("relay.requested", print)
    result = hook.before_swap("0xuser", "ETH-USDC", params)
"""

from relayhook.hook.adapter import RelayHook
from relayhook.hook.payload import decode_opt_in, encode_opt_in

__all__ = [
    "RelayHook",
    "decode_opt_in",
    "encode_opt_in",
]
