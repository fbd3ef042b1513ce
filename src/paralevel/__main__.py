"""
paralevel CLI entrypoint.

Executed via:
  python -m paralevel
"""

from paralevel.cli.app import app

if __name__ == "__main__":
    app()
