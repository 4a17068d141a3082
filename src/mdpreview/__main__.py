"""Allow ``python -m mdpreview``."""

from mdpreview.cli import app

if __name__ == "__main__":
    app()
