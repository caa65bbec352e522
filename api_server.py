#!/usr/bin/env python3
"""
Image Color Picker API Server
Upload an image once, then click it (or ask for its dominant color) as often as needed.
"""

import os
import math
import logging
import uuid
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv

# Load environment variables first
load_dotenv()

from flask import Flask, request, jsonify
from flask_cors import CORS
from werkzeug.utils import secure_filename

# --- Centralized Logging Configuration ---
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO"),
    format='%(asctime)s - %(name)-25s - %(levelname)-8s - %(message)s',
    datefmt='%H:%M:%S'
)

# Import services and models
from services.image_service import ImageService
from services.report_service import ReportService
from pipeline.pick_color import pick_color
from pipeline.dominant_color import estimate_dominant_color
from models.color_report import ColorReport
from models.errors import DecodeError
from models.geometry import DisplayGeometry, ClickPoint
from models.image import Image

app = Flask(__name__)
CORS(app)  # Enable CORS for frontend communication

# Configuration
ALLOWED_EXTENSIONS = set(os.getenv("ALLOWED_EXTENSIONS", "png,jpg,jpeg,gif,bmp,webp").split(","))
MAX_CONTENT_LENGTH = int(os.getenv("MAX_UPLOAD_SIZE_MB", "20")) * 1024 * 1024


def env_flag(name: str, default: bool = False) -> bool:
    """Read a yes/no environment variable."""
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


DEBUG = env_flag("API_DEBUG")
MAX_SESSIONS = int(os.getenv("MAX_SESSIONS", "100"))

app.config['MAX_CONTENT_LENGTH'] = MAX_CONTENT_LENGTH

# Initialize services
image_service = ImageService()
report_service = ReportService()

logger = logging.getLogger(__name__)

# Session storage for loaded images
sessions = {}


class PickerSession:
    """Holds the decoded image for a single user's session."""

    def __init__(self, session_id: str):
        self.session_id = session_id
        self.image: Optional[Image] = None

    def clear(self):
        """Drop the image from memory."""
        self.image = None


def get_or_create_session(session_id: str = None) -> PickerSession:
    """Get a session this server issued, or create a new one under a fresh id."""
    if session_id in sessions:
        return sessions[session_id]

    # dicts keep insertion order, so the first key is the oldest session
    while sessions and len(sessions) >= MAX_SESSIONS:
        oldest = next(iter(sessions))
        sessions.pop(oldest).clear()
        logger.info(f"Evicted session {oldest}")

    session = PickerSession(str(uuid.uuid4()))
    sessions[session.session_id] = session
    return session


def get_loaded_session(payload: dict) -> Optional[PickerSession]:
    """Return the session named in *payload* if it holds an image."""
    session_id = payload.get('session_id')
    session = sessions.get(session_id) if session_id else None
    if session is None or session.image is None:
        return None
    return session


def allowed_file(filename: str) -> bool:
    """Check if file extension is allowed."""
    return '.' in filename and filename.rsplit('.', 1)[1].lower() in ALLOWED_EXTENSIONS


def report_to_json(report: ColorReport) -> dict:
    """Convert a ColorReport into the JSON shape the frontend renders."""
    body = {'hit': report.ok, 'message': report.message}
    if report.ok:
        body.update(
            hex=report.color.hex,
            rgb=list(report.color.as_rgb()),
            swatch=report_service.swatch_base64(report.color),
        )
    if report.pixel is not None:
        body['pixel'] = list(report.pixel)
    return body


@app.route('/api/health', methods=['GET'])
def health():
    return jsonify({'status': 'ok', 'sessions': len(sessions)})


@app.route('/api/load-image', methods=['POST'])
def load_image():
    """Decode an uploaded image into the session."""
    try:
        if 'image' not in request.files:
            return jsonify({'success': False, 'message': 'No image provided'}), 400

        file = request.files['image']
        if file.filename == '':
            return jsonify({'success': False, 'message': 'No file selected'}), 400

        if not allowed_file(file.filename):
            return jsonify({'success': False, 'message': 'File type not allowed'}), 400

        filename = secure_filename(file.filename)
        try:
            image = image_service.decode(file.read(), Path(filename))
        except DecodeError as e:
            logger.warning(f"Decode failed for {filename}: {e}")
            return jsonify({
                'success': False,
                'message': report_service.decode_failure_report().message
            }), 400

        session = get_or_create_session(request.form.get('session_id'))
        session.clear()  # Start fresh
        session.image = image
        logger.info(f"Loaded {filename} ({image.width}x{image.height}) for session {session.session_id}")

        return jsonify({
            'success': True,
            'session_id': session.session_id,
            'width': image.width,
            'height': image.height,
            'preview': image_service.to_base64_png(image),
            'message': report_service.prompt_report().message,
            'notice': report_service.ready_report().message
        })

    except Exception as e:
        logger.error(f"Image loading error: {e}")
        return jsonify({'success': False, 'message': f'Error loading image: {str(e)}'}), 500


@app.route('/api/pick', methods=['POST'])
def pick():
    """Report the color under a click on the rendered image."""
    try:
        payload = request.get_json(silent=True) or {}
        session = get_loaded_session(payload)
        if session is None:
            return jsonify({'success': False, 'message': 'Invalid session'}), 400

        try:
            click = ClickPoint(float(payload['x']), float(payload['y']))
            display = DisplayGeometry(
                float(payload.get('display_width', session.image.width)),
                float(payload.get('display_height', session.image.height)),
            )
        except (KeyError, TypeError, ValueError):
            return jsonify({'success': False, 'message': 'x and y are required numbers'}), 400

        if not all(math.isfinite(v) for v in (click.x, click.y, display.width, display.height)):
            return jsonify({'success': False, 'message': 'Coordinates must be finite numbers'}), 400

        report = pick_color(session.image, display, click)
        return jsonify({'success': True, 'session_id': session.session_id, **report_to_json(report)})

    except Exception as e:
        logger.error(f"Pick error: {e}")
        return jsonify({'success': False, 'message': f'Error picking color: {str(e)}'}), 500


@app.route('/api/dominant-color', methods=['POST'])
def dominant_color():
    """Report the dominant color of the session image."""
    try:
        payload = request.get_json(silent=True) or {}
        session = get_loaded_session(payload)
        if session is None:
            return jsonify({'success': False, 'message': 'Invalid session'}), 400

        report = estimate_dominant_color(session.image)
        return jsonify({'success': True, 'session_id': session.session_id, **report_to_json(report)})

    except Exception as e:
        logger.error(f"Dominant color error: {e}")
        return jsonify({'success': False, 'message': f'Error estimating dominant color: {str(e)}'}), 500


@app.route('/api/clear-session', methods=['POST'])
def clear_session():
    """Forget a session and its image."""
    try:
        payload = request.get_json(silent=True) or {}
        session = sessions.pop(payload.get('session_id'), None)
        if session is not None:
            session.clear()
        return jsonify({'success': True, 'message': 'Session cleared'})

    except Exception as e:
        logger.error(f"Error clearing session: {e}")
        return jsonify({'success': False, 'message': 'Error clearing session'}), 500


@app.errorhandler(413)
def too_large(e):
    """Handle file too large error."""
    limit_mb = MAX_CONTENT_LENGTH // (1024 * 1024)
    return jsonify({'error': f'File too large. Maximum size is {limit_mb}MB.'}), 413


@app.errorhandler(500)
def internal_error(e):
    """Handle internal server error."""
    logger.error(f"Internal server error: {e}")
    return jsonify({'error': 'Internal server error'}), 500


if __name__ == '__main__':
    logger.info("Starting Image Color Picker API Server")
    logger.info(f"Max upload size: {MAX_CONTENT_LENGTH // (1024*1024)}MB")
    logger.info("Endpoints: /api/load-image, /api/pick, /api/dominant-color, /api/clear-session")

    app.run(debug=DEBUG, host='0.0.0.0', port=int(os.getenv("API_SERVER_PORT", "5002")), threaded=False)
