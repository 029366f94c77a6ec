"""Domain Interfaces (Ports):

Defines the contracts (Abstract Base Classes) that infrastructure clients
must implement. Host code can depend on these interfaces rather than on a
concrete transport.
"""
