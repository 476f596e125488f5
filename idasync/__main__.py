"""Allow running idasync with ``python -m idasync``."""

from .cli import main

if __name__ == "__main__":
    main()
