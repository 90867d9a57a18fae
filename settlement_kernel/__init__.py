"""
Settlement Kernel

Foundation for the booking settlement engine:
- Booking record shape and settlement states
- Decimal-only Money values
- Injectable clock
- Typed exceptions and structured logging
"""

__version__ = "0.1.0"
