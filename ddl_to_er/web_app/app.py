# -*- coding: utf-8 -*-
"""
ER Diagram Web Application - Flask Backend
"""
import logging

from flask import Flask, Blueprint, request, jsonify, current_app
from flask_cors import CORS

from ..src import parse_sql_strict
from ..src.exceptions import NoTablesFoundError, VisionServiceError, VisionNotConfiguredError
from .app_config import config
from .vision_client import VisionClient

api_blueprint = Blueprint('api', __name__, url_prefix='/api')


@api_blueprint.route('/health', methods=['GET'])
def api_health():
    """Liveness probe"""
    return jsonify({'status': 'ok'})


@api_blueprint.route('/parse', methods=['POST'])
def api_parse():
    """Parse SQL into tables and relations"""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({'error': 'Request body must be a JSON object'}), 400

    sql = data.get('sql')
    if not sql or not isinstance(sql, str):
        return jsonify({'error': 'SQL is required'}), 400

    try:
        schema = parse_sql_strict(sql)
    except NoTablesFoundError:
        return jsonify({'error': 'No tables found in the SQL'}), 400
    except Exception as e:
        current_app.logger.exception(f"Unexpected error while parsing SQL: {e}")
        return jsonify({'error': 'Error while parsing SQL'}), 500

    current_app.logger.info(
        f"Parsed {len(schema.tables)} table(s) and {len(schema.relations)} relation(s)"
    )
    return jsonify({'schema': schema.to_dict()})


@api_blueprint.route('/analyze-image', methods=['POST'])
def api_analyze_image():
    """Turn a diagram image into CREATE TABLE SQL through the vision service"""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({'error': 'Request body must be a JSON object'}), 400

    image = data.get('image')
    if not image or not isinstance(image, str):
        return jsonify({'error': 'Image is required'}), 400

    try:
        sql = current_app.vision_client.image_to_sql(image)
    except VisionNotConfiguredError as e:
        current_app.logger.warning(f"Image analysis unavailable: {e}")
        return jsonify({'error': 'Image analysis is not configured'}), 503
    except VisionServiceError as e:
        current_app.logger.error(f"Image analysis failed: {e}")
        return jsonify({'error': 'Error while analyzing the image'}), 502

    return jsonify({'sql': sql})


def configure_logging(app: Flask):
    """Apply LOG_LEVEL to the root logger and the Flask logger"""
    level = getattr(logging, str(app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO)
    logging.basicConfig(level=level, format='%(asctime)s %(levelname)s %(name)s: %(message)s')
    app.logger.setLevel(level)


def create_app(config_object=None) -> Flask:
    """Build the Flask application"""
    config_object = config_object or config

    app = Flask(__name__)
    app.config.from_object(config_object)
    CORS(app)
    configure_logging(app)

    app.vision_client = VisionClient(**config_object.get_vision_config())
    app.register_blueprint(api_blueprint)

    @app.errorhandler(413)
    def request_too_large(error):
        return jsonify({'error': 'Request body too large'}), 413

    @app.errorhandler(404)
    def not_found(error):
        return jsonify({'error': 'Not found'}), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify({'error': 'Method not allowed'}), 405

    return app


app = create_app()
