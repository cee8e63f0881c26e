"""
Flask application exposing QR detection over HTTP.

Each request body is an encoded image, sent either raw (any content type)
or as a multipart form field named "image". Requests are served on
separate threads; detection calls share no state.
"""

import argparse
import logging

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from config import MAX_UPLOAD_BYTES, REGION_PADDING, WEB_HOST, WEB_PORT
from detection import DecodeError, Detector, InternalFailure, InvalidArgument
from logging_utils import configure_logging, add_logging_args
from scan import detect_and_decode, detect_multiple, has_code
from scan.schemas import ErrorOut

logger = logging.getLogger(__name__)


def _request_image_bytes() -> bytes:
    """Return the uploaded image bytes from a multipart field or the raw body."""
    upload = request.files.get("image")
    if upload is not None:
        return upload.read()
    data = request.get_data(cache=False)
    if not data:
        raise InvalidArgument("Expected an image in the request body or an 'image' form field")
    return data


def _request_padding() -> int:
    padding = request.args.get("padding", REGION_PADDING, type=int)
    if padding < 0:
        raise InvalidArgument(f"padding must be non-negative, got {padding}")
    return padding


def _error(message: str, status: int):
    return jsonify(ErrorOut(error=message).model_dump()), status


def create_app(detector: Detector | None = None) -> Flask:
    """Create and configure the Flask application.

    Args:
        detector: Detector used by every request. Defaults to OpenCVQRDetector.
    """
    app = Flask(__name__)
    app.config["MAX_CONTENT_LENGTH"] = MAX_UPLOAD_BYTES

    @app.errorhandler(InvalidArgument)
    def handle_invalid_argument(exc):
        return _error(str(exc), 400)

    @app.errorhandler(DecodeError)
    def handle_decode_error(exc):
        return _error(str(exc), 400)

    @app.errorhandler(InternalFailure)
    def handle_internal_failure(exc):
        logger.exception("Detection failed: %s", exc)
        return _error(str(exc), 500)

    @app.errorhandler(HTTPException)
    def handle_http_exception(exc):
        return _error(exc.description or exc.name, exc.code or 500)

    @app.route('/health')
    def health():
        return jsonify({"status": "ok"})

    @app.route('/api/detect', methods=['POST'])
    def api_detect():
        """Detect and decode a QR code, with the full preprocessing cascade."""
        include_image = request.args.get("image", "1") != "0"
        result = detect_and_decode(
            _request_image_bytes(),
            detector=detector,
            padding=_request_padding(),
            include_image=include_image,
        )
        return jsonify(result.model_dump())

    @app.route('/api/detect/multiple', methods=['POST'])
    def api_detect_multiple():
        """Detect QR codes as a list (at most one entry)."""
        include_image = request.args.get("image", "1") != "0"
        result = detect_multiple(
            _request_image_bytes(),
            detector=detector,
            padding=_request_padding(),
            include_image=include_image,
        )
        return jsonify(result.model_dump())

    @app.route('/api/has-code', methods=['POST'])
    def api_has_code():
        """Quick presence check: one locate call, no decoding."""
        result = has_code(_request_image_bytes(), detector=detector)
        return jsonify(result.model_dump())

    return app


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description=f"Launch the QR detection web service (port {WEB_PORT})."
    )
    parser.add_argument("--host", default=WEB_HOST, help=f"Bind address (default: {WEB_HOST})")
    parser.add_argument("--port", type=int, default=WEB_PORT, help=f"Port (default: {WEB_PORT})")
    add_logging_args(parser)
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the web server."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level, args.verbose, args.quiet)

    app = create_app()

    logger.info("Starting QR detection service...")
    logger.info("POST images to http://%s:%s/api/detect", args.host, args.port)
    logger.info("Press Ctrl+C to stop")
    app.run(host=args.host, port=args.port, debug=False, threaded=True)
    return 0


if __name__ == '__main__':
    main()
