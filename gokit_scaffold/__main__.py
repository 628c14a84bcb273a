"""Allow ``python -m gokit_scaffold``."""

from gokit_scaffold.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
