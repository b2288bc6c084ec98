"""
Domain layer for the Poynt orders client.

This layer contains the records the client builds before handing
them to the transport.
"""
