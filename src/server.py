"""Flask app exposing the Prometheus metrics and a health check."""

import logging
import threading

from flask import Flask, Response, request
from prometheus_client.exposition import choose_encoder

from src.metrics import ExporterMetrics

logger = logging.getLogger(__name__)


def create_app(metrics: ExporterMetrics) -> Flask:
    app = Flask(__name__)

    @app.route("/metrics")
    def metrics_endpoint():
        # Accept header picks Prometheus text or OpenMetrics.
        encoder, content_type = choose_encoder(request.headers.get("Accept"))
        return Response(encoder(metrics.registry), status=200, content_type=content_type)

    @app.route("/health")
    def health():
        return Response("OK", status=200, mimetype="text/plain")

    return app


def run_server(app: Flask, host: str, port: int):
    """Run the Flask app (intended for use in a daemon thread)."""
    app.run(host=host, port=port, use_reloader=False)


def start_server_thread(app: Flask, host: str, port: int,
                        stopped: threading.Event) -> threading.Thread:
    """Run the app in a daemon thread; *stopped* is set if the server ever returns.

    The server only returns when it failed, e.g. the port could not be bound.
    """
    def serve():
        try:
            run_server(app, host, port)
        except SystemExit as exc:
            # werkzeug exits instead of raising when the bind fails
            logger.error("Failed to start HTTP server on %s:%d (exit status %s)", host, port, exc.code)
        except OSError as exc:
            logger.error("Failed to start HTTP server on %s:%d: %s", host, port, exc)
        finally:
            stopped.set()

    thread = threading.Thread(target=serve, name="metrics-server", daemon=True)
    thread.start()
    return thread
