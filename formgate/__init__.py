"""formgate: authenticated Typeform webhook intake into the Bronze layer."""

from __future__ import annotations

__version__ = "0.1.0"
