"""crudbus CLI entrypoint."""

from crudbus.cli import app

if __name__ == "__main__":
    app()
