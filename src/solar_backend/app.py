from flask import Flask, Response, jsonify, request, send_from_directory
from flask_cors import CORS
import os
import logging

from solar_backend import config
from solar_backend.errors import EmptyInputError, InvalidBufferError, ProviderError, UnsupportedFormatError
from solar_backend.panel_layout.strategy_factory import choose_strategy
from solar_backend.solar_providers.provider_factory import get_provider
from solar_backend.utils.estimates import estimate_for_selection
from solar_backend.utils.geo_mapping import optimal_zoom
from solar_backend.utils.image_processing import process_geotiff_bytes

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")

CURRENT_DIR = os.path.dirname(__file__)
frontend_static_folder = os.path.abspath(os.path.join(CURRENT_DIR, "..", "..", "dist"))

DEFAULT_CANVAS_SIZE = (400, 300)

app = Flask(__name__, static_folder=frontend_static_folder, static_url_path="")
logging.info(f"Serving static files from frontend: {frontend_static_folder}")

CORS(app, resources={r"/api/*": {"origins": "*"}}, expose_headers=["X-Raster-Bounds"])


class InvalidRequest(ValueError):
    pass


def _parse_coordinates(lat, lng):
    try:
        lat, lng = float(lat), float(lng)
    except (TypeError, ValueError):
        raise InvalidRequest(f"Invalid coordinates: {lat}, {lng}")
    if not (-90 <= lat <= 90 and -180 <= lng <= 180):
        raise InvalidRequest(f"Coordinates out of range: {lat}, {lng}")
    return lat, lng


def _positive_int(value, default, field):
    if value is None:
        return default
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise InvalidRequest(f"Invalid '{field}': {value}")
    if number <= 0:
        raise InvalidRequest(f"'{field}' must be positive")
    return number


def _provider():
    return get_provider(config.SOLAR_PROVIDER, config.provider_credentials())


def _provider_error_response(e: ProviderError, what: str):
    logging.error(f"Solar API error while fetching {what}: {e}")
    return jsonify({"error": f"Failed to fetch {what}"}), 502


@app.errorhandler(InvalidRequest)
def handle_bad_request(e):
    return jsonify({"error": str(e)}), 400


@app.route("/")
def index():
    return send_from_directory(app.static_folder, "index.html")


@app.route("/api/config", methods=["GET"])
def get_config():
    return jsonify({"googleApiKey": config.GOOGLE_SOLAR_API_KEY})


@app.route("/api/geocode", methods=["GET"])
def geocode():
    address = request.args.get("address", "").strip()
    if not address:
        return jsonify({"error": "Missing 'address' query parameter"}), 400

    try:
        return jsonify(_provider().geocode(address))
    except ValueError as e:
        return jsonify({"error": str(e)}), 500
    except ProviderError as e:
        return _provider_error_response(e, "geocoding results")


@app.route("/api/solar/building/<lat>/<lng>", methods=["GET"])
def building_insights(lat, lng):
    lat, lng = _parse_coordinates(lat, lng)

    try:
        return jsonify(_provider().building_insights(lat, lng))
    except ValueError as e:
        return jsonify({"error": str(e)}), 500
    except ProviderError as e:
        return _provider_error_response(e, "solar data")


@app.route("/api/solar/data-layers/<lat>/<lng>", methods=["GET"])
def data_layers(lat, lng):
    lat, lng = _parse_coordinates(lat, lng)
    radius = _positive_int(request.args.get("radius"), config.DATA_LAYERS_RADIUS, "radius")
    view = request.args.get("view", config.DATA_LAYERS_VIEW)

    try:
        return jsonify(_provider().data_layers(lat, lng, radius, view))
    except ValueError as e:
        return jsonify({"error": str(e)}), 500
    except ProviderError as e:
        return _provider_error_response(e, "solar data layers")


@app.route("/api/solar/image-proxy", methods=["GET"])
def image_proxy():
    layer_url = request.args.get("url")
    layer_type = request.args.get("type", "")
    if not layer_url:
        return jsonify({"error": "Missing 'url' query parameter"}), 400

    try:
        provider = _provider()
    except ValueError as e:
        return jsonify({"error": str(e)}), 500

    try:
        data, content_type = provider.fetch_layer(layer_url)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    except ProviderError as e:
        return _provider_error_response(e, f"{layer_type or 'image'} layer")

    try:
        processed = process_geotiff_bytes(data, layer_type, content_type)
    except UnsupportedFormatError as e:
        logging.warning(f"Layer '{layer_type}' unavailable: {e}")
        return jsonify({"error": "layer unavailable", "details": str(e)}), 422
    except InvalidBufferError as e:
        logging.error(f"Failed to encode '{layer_type}' layer: {e}", exc_info=True)
        return jsonify({"error": "Failed to encode image"}), 500

    response = Response(processed.content, mimetype=processed.mimetype)
    response.headers["Cache-Control"] = f"public, max-age={config.IMAGE_CACHE_MAX_AGE}"
    if processed.bounds:
        response.headers["X-Raster-Bounds"] = ",".join(str(b) for b in processed.bounds)
    return response


@app.route("/api/solar/panel-layout", methods=["POST"])
def panel_layout():
    request_data = request.get_json(silent=True) or {}
    solar_potential = request_data.get("solarPotential")
    if not solar_potential:
        return jsonify({"error": "Missing 'solarPotential' in request body"}), 400

    try:
        panel_count = int(request_data.get("panelCount", 0))
    except (TypeError, ValueError):
        raise InvalidRequest(f"Invalid 'panelCount': {request_data.get('panelCount')}")
    canvas_width = _positive_int(request_data.get("canvasWidth"), DEFAULT_CANVAS_SIZE[0], "canvasWidth")
    canvas_height = _positive_int(request_data.get("canvasHeight"), DEFAULT_CANVAS_SIZE[1], "canvasHeight")

    try:
        strategy = choose_strategy(solar_potential, request_data.get("strategy"))
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    except EmptyInputError as e:
        return jsonify({"error": "No panel geometry available", "details": str(e)}), 422

    max_panels = len(solar_potential.get("solarPanels") or []) or int(solar_potential.get("maxArrayPanelsCount") or 0)
    # Placements never exceed what the roof can hold.
    selected = max(0, min(panel_count, max_panels))

    placements = strategy.place(selected, canvas_width, canvas_height)
    estimate = estimate_for_selection(solar_potential.get("maxArrayAreaMeters2") or 0.0, selected, max_panels)

    bounds = getattr(strategy, "bounds", None)
    logging.info(f"Placed {len(placements)} panels using '{strategy.name}' strategy")
    return jsonify({
        "strategy": strategy.name,
        "bounds": bounds.to_dict() if bounds else None,
        "zoom": optimal_zoom(bounds) if bounds else None,
        "placements": [p.to_dict() for p in placements],
        "estimate": estimate.to_dict(),
    })


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=config.PORT, debug=os.environ.get("FLASK_ENV") == "development")
