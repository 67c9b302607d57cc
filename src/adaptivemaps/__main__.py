"""Module entrypoint for ``python -m adaptivemaps``."""

from adaptivemaps.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
