"""Allow running as ``python -m timeq``."""

from timeq.main import run

if __name__ == "__main__":
    run()
