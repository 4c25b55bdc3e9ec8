from datetime import datetime, timezone
from flask import current_app, jsonify
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from folio.extensions import db
from . import v1_bp

@v1_bp.route('/health', methods=['GET'])
def health_check():
    try:
        db.session.execute(text("SELECT 1"))
        database = "connected"
    except SQLAlchemyError as exc:
        current_app.logger.error("Health check database failure: %s", exc)
        database = "disconnected"

    healthy = database == "connected"
    return jsonify({
        "status": "ok" if healthy else "unhealthy",
        "service": "folio",
        "database": database,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }), 200 if healthy else 503
