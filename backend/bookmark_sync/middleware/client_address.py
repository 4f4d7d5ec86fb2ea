"""
Client address extraction

Best-effort identification used to partition the new sync quota. The
forwarding headers are client controlled and can be spoofed, so this is not
an authentication mechanism.
"""
from flask import request

UNKNOWN_ADDRESS = 'unknown'


def get_client_ip_address() -> str:
    """Client address from proxy headers, falling back to the socket peer."""
    forwarded_for = request.headers.get('X-Forwarded-For', '')
    if forwarded_for.strip():
        # May hold a chain of addresses, the first is the original client
        first = forwarded_for.split(',')[0].strip()
        if first:
            return first

    for header in ('X-Real-IP', 'X-Client-IP'):
        value = request.headers.get(header, '').strip()
        if value:
            return value

    return request.remote_addr or UNKNOWN_ADDRESS
