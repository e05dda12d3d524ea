"""Module entrypoint for ``python -m jtc``."""

from .cli import main


if __name__ == "__main__":
    main()
