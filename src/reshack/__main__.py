"""reshack CLI bootstrap."""

from __future__ import annotations

from reshack.cli import app

if __name__ == "__main__":
    app()
