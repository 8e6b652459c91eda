"""cashrun: order lifecycle and ATM assignment core for cash delivery."""

__version__ = "0.1.0"
