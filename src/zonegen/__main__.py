"""Entry point for python -m zonegen."""

from .cli import main

if __name__ == "__main__":
    main()
