"""Console entry point for the resolver CLI."""
from __future__ import annotations

from .app import main


if __name__ == "__main__":
    main()
