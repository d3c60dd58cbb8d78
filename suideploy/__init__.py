"""suideploy - publish, upgrade and exercise a Sui Move package."""

__version__ = "1.0.0"
