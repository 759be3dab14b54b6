"""
Flask web server for the Freebase topic browser.

Routes
──────
GET  /api/topic?id=...          Fetch a topic (optional lang, repeatable exclude)
GET  /api/search?q=...          Search topics, highest score first (optional limit)
GET  /api/image?id=...          Raw image bytes for a topic
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, Response, jsonify, request

# Allow running as `python web/app.py` from the project root
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

load_dotenv()

from config.settings import Settings
from freebase_api import FixtureSession, ServiceError, Session, Topic, search

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = Flask(__name__)

_session: Optional[Session] = None


def get_session() -> Session:
    """Lazy-initialise the fixture session from the environment settings."""
    global _session
    if _session is None:
        settings = Settings()
        settings.validate()
        _session = FixtureSession(settings.fixtures_dir)
    return _session


# ── Topic API ──────────────────────────────────────────────────────────────

@app.route("/api/topic")
def get_topic():
    """Return a fully parsed topic as JSON."""
    topic_id = request.args.get("id", "").strip()
    if not topic_id:
        return jsonify({"error": "id query param is required"}), 400

    lang = request.args.get("lang") or Settings().lang
    exclude = request.args.getlist("exclude")

    try:
        topic = Topic.get(topic_id, get_session(), lang=lang, exclude=exclude)
    except ServiceError as exc:
        logger.warning("Topic lookup failed for id=%r: %s", topic_id, exc)
        return jsonify({"error": exc.message, "code": exc.code}), exc.code

    return jsonify(topic.to_dict())


# ── Search API ─────────────────────────────────────────────────────────────

@app.route("/api/search")
def search_topics():
    """Return search hits as a list of ``{score, topic}``, highest score first."""
    query = request.args.get("q", "").strip()
    if not query:
        return jsonify({"error": "q query param is required"}), 400

    limit = request.args.get("limit", type=int) or Settings().search_limit

    try:
        results = search(query, get_session(), limit=limit)
    except ServiceError as exc:
        logger.warning("Search failed for q=%r: %s", query, exc)
        return jsonify({"error": exc.message, "code": exc.code}), exc.code

    return jsonify(
        [{"score": score, "topic": topic.to_dict()} for score, topic in results.items()]
    )


# ── Image API ──────────────────────────────────────────────────────────────

@app.route("/api/image")
def get_image():
    """Return the raw image bytes for a topic."""
    topic_id = request.args.get("id", "").strip()
    if not topic_id:
        return jsonify({"error": "id query param is required"}), 400

    image = Topic(topic_id, session=get_session()).image
    if image is None or not image.exists:
        return jsonify({"error": "Not found"}), 404
    return Response(image.data, mimetype="application/octet-stream")


# ── Entry point ────────────────────────────────────────────────────────────

if __name__ == "__main__":
    settings = Settings()
    app.run(debug=settings.debug, host="0.0.0.0", port=settings.port)
