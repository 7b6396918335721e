"""Development entry point: ``python app.py``.

Production deployments should point a WSGI server at ``app:app``.
"""

from src.timeclock_portal.timeclock_portal.main import create_app

app = create_app()

if __name__ == "__main__":
    app.run(host="0.0.0.0", port=5000, debug=app.config["DEBUG"])
