"""Herald - schedule named events and execute them when they come due."""

__version__ = "0.1.0"
