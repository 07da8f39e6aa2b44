"""Module entrypoint for `python -m terminix`."""

try:
    from .cli import run
except ImportError:
    # Script execution context has no parent package.
    from terminix.cli import run


if __name__ == "__main__":
    raise SystemExit(run())
