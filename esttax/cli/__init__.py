"""Est Tax CLI."""
