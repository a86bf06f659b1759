from flask import Flask, request, jsonify
from flask_cors import CORS
from engine import FeeProcessor
from engine.config import Settings
import logging

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

settings = Settings.from_env()

app = Flask(__name__)

# Enable CORS for all routes (the booking web client calls the API directly)
CORS(app)

# Initialize the fee processor; a malformed tier table stops startup here
processor = FeeProcessor(settings.build_calculator())


@app.route("/api", methods=["GET"])
def api_info():
    """API information endpoint"""
    return jsonify({
        "status": "ok",
        "message": "Platform Fee Calculator API",
        "version": "1.0",
        "environment": settings.environment,
        "endpoints": {
            "calculate_fee": "/calculate_fee [POST]",
            "tier_progress": "/tier_progress [POST]",
            "tiers": "/tiers [GET]",
            "health": "/health [GET]"
        }
    }), 200


@app.route("/health", methods=["GET"])
def health():
    """Health check for monitoring"""
    return jsonify({"status": "healthy"}), 200


@app.route("/tiers", methods=["GET"])
def tiers():
    """Published commission tier schedule"""
    return jsonify(processor.tier_schedule()), 200


def _handle(action, label):
    try:
        input_data = request.get_json(force=True, silent=True)

        if not input_data:
            return jsonify({
                "error": "No input data provided",
                "status": "failed"
            }), 400

        if not isinstance(input_data, dict):
            raise TypeError(f"Request body must be a JSON object, got: {type(input_data).__name__}")

        reference = input_data.get("reference", "Unknown")
        logger.info(f"{label}: {reference}")

        result = action(input_data)

        logger.info(f"{label} succeeded: {reference}")

        return jsonify(result), 200

    except (ValueError, KeyError, TypeError) as e:
        # Validation errors from engine
        logger.error(f"Validation error: {str(e)}")
        return jsonify({
            "error": f"Validation error: {str(e)}",
            "status": "validation_failed"
        }), 400

    except Exception as e:
        # Unexpected errors
        logger.error(f"Processing error: {str(e)}", exc_info=True)
        return jsonify({
            "error": "An unexpected error occurred during processing",
            "status": "failed"
        }), 500


@app.route("/calculate_fee", methods=["POST"])
def calculate_fee():
    """
    Calculate the platform fee and contractor net for a transaction
    """
    return _handle(processor.process_from_dict, "Calculating fee")


@app.route("/tier_progress", methods=["POST"])
def tier_progress():
    """Current tier and volume needed for the next tier"""
    return _handle(processor.tier_progress_from_dict, "Calculating tier progress")


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=settings.port, debug=False)
