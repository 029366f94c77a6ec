"""Infrastructure Layer: Contains concrete implementations and adapters.

Connects the library to the outside world (the FCM HTTP gateway, the
environment, configuration files, logging) by implementing the interfaces
defined in the domain layer.
"""
