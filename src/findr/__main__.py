"""Entry point for ``python -m findr``."""

from findr.cli import main

if __name__ == "__main__":
    main()
