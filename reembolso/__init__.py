"""Backend de reembolso de despesas."""

__version__ = "1.0.0"
