"""Domain Layer: Message and response models, interfaces and events.

Holds the data-transfer types exchanged with the messaging gateway and the
contract that transport implementations fulfil. Has no I/O.
"""
