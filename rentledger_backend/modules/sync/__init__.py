"""Document persistence for the portfolio state."""

from .models import AppDocument

__all__ = ["AppDocument"]
