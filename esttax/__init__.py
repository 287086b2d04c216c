"""Est Tax - Federal estimated quarterly tax calculator for the self-employed."""

__version__ = "0.1.0"
