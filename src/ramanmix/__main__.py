"""Allow ``python -m ramanmix``."""

from ramanmix.cli.app import app

if __name__ == "__main__":
    app()
