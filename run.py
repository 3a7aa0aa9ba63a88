from library_backend import create_app
from library_backend.storage import shutdown
from library_backend.tasks.scheduler import shutdown_scheduler

app = create_app()

if __name__ == "__main__":
    try:
        app.run(host="0.0.0.0", port=app.config["PORT"])
    finally:
        shutdown_scheduler(app)
        shutdown(app)
