from flask import Blueprint, jsonify

from library_backend.services.stats_service import StatsService

stats_bp = Blueprint("stats", __name__, url_prefix="/api")


@stats_bp.get("/stats")
def stats():
    return jsonify(StatsService.summary())
