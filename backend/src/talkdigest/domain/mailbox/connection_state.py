"""ConnectionState state machine for the mailbox session lifecycle"""

from enum import Enum
from typing import Dict, List


class ConnectionState(str, Enum):
    """Mailbox session state enum

    State flow:
    DISCONNECTED → CONNECTING → CONNECTED
    CONNECTING → BACKOFF → CONNECTING (automatic retry)
    CONNECTED → DISCONNECTED (session end)
    """
    DISCONNECTED = "DISCONNECTED"  # No session (initial state)
    CONNECTING = "CONNECTING"      # Connect attempt in flight
    CONNECTED = "CONNECTED"        # Authenticated session available
    BACKOFF = "BACKOFF"            # Waiting for scheduled retry


# State transition rules
ALLOWED_TRANSITIONS: Dict[ConnectionState, List[ConnectionState]] = {
    ConnectionState.DISCONNECTED: [ConnectionState.CONNECTING],
    ConnectionState.CONNECTING: [
        ConnectionState.CONNECTED,
        ConnectionState.BACKOFF,
        ConnectionState.DISCONNECTED,  # retries exhausted or disconnect()
    ],
    ConnectionState.CONNECTED: [ConnectionState.DISCONNECTED],
    ConnectionState.BACKOFF: [ConnectionState.CONNECTING, ConnectionState.DISCONNECTED],
}


def can_transition(from_state: ConnectionState, to_state: ConnectionState) -> bool:
    """Validate if state transition is allowed

    Args:
        from_state: Current state
        to_state: Target state

    Returns:
        True if transition is allowed, False otherwise

    Example:
        >>> can_transition(ConnectionState.DISCONNECTED, ConnectionState.CONNECTING)
        True
        >>> can_transition(ConnectionState.CONNECTED, ConnectionState.BACKOFF)
        False
    """
    return to_state in ALLOWED_TRANSITIONS.get(from_state, [])


def get_allowed_transitions(from_state: ConnectionState) -> List[ConnectionState]:
    """Get list of allowed transitions from current state"""
    return ALLOWED_TRANSITIONS.get(from_state, [])
