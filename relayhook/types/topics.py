"""
Centralized topic constants for the outbound notification channel.

The relayer consumes these out of band.
"""

# Relay lifecycle topics
T_RELAY_REQUESTED = "relay.requested"
T_SWAP_COMPLETED = "swap.completed"

ALL_TOPICS = (T_RELAY_REQUESTED, T_SWAP_COMPLETED)
