"""WSGI entry point: ``flask --app futureworth.wsgi run``."""

from futureworth.app import create_app

app = create_app()

if __name__ == "__main__":
    app.run(port=5000, debug=True)
