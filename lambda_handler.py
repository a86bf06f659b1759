"""
AWS Lambda handler for the Platform Fee Engine API.

This is the production entry point for AWS Lambda deployments.
For local development, use main.py (Flask app) instead.
"""

import base64
import json
import logging

from engine import FeeProcessor
from engine.config import Settings

# Configure logging
logger = logging.getLogger()
logger.setLevel(logging.INFO)

settings = Settings.from_env()

# Initialize processor (reused across warm invocations)
processor = FeeProcessor(settings.build_calculator())

# CORS headers for API Gateway
CORS_HEADERS = {
    "Content-Type": "application/json",
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type,Authorization",
    "Access-Control-Allow-Methods": "GET,POST,OPTIONS",
}


def _response(status_code, payload):
    return {"statusCode": status_code, "headers": CORS_HEADERS, "body": json.dumps(payload)}


def lambda_handler(event, context):
    """
    Main Lambda entry point.

    Handles API Gateway events for:
    - GET /health
    - GET /api
    - GET /tiers
    - POST /calculate_fee
    - POST /tier_progress
    - OPTIONS (CORS preflight)
    """
    # Handle CORS preflight
    http_method = event.get("httpMethod") or event.get("requestContext", {}).get("http", {}).get("method", "")
    if http_method == "OPTIONS":
        return {"statusCode": 200, "headers": CORS_HEADERS, "body": ""}

    # Get path (supports both REST API and HTTP API formats)
    path = event.get("path") or event.get("rawPath", "")

    # Route to appropriate handler
    if path == "/health" and http_method == "GET":
        return handle_health()
    elif path == "/api" and http_method == "GET":
        return handle_api_info()
    elif path == "/tiers" and http_method == "GET":
        return _response(200, processor.tier_schedule())
    elif path == "/calculate_fee" and http_method == "POST":
        return handle_post(event, processor.process_from_dict)
    elif path == "/tier_progress" and http_method == "POST":
        return handle_post(event, processor.tier_progress_from_dict)
    else:
        return _response(404, {"error": "Not found", "path": path})


def handle_health():
    """Health check endpoint."""
    return _response(200, {"status": "healthy", "environment": settings.environment})


def handle_api_info():
    """API information endpoint."""
    return _response(
        200,
        {
            "status": "ok",
            "message": "Platform Fee Calculator API",
            "version": "1.0",
            "environment": settings.environment,
            "runtime": "AWS Lambda",
            "endpoints": {
                "calculate_fee": "/calculate_fee [POST]",
                "tier_progress": "/tier_progress [POST]",
                "tiers": "/tiers [GET]",
                "health": "/health [GET]",
            },
        },
    )


def handle_post(event, action):
    """Parse the request body and run it through the fee processor."""
    try:
        # Parse request body
        body = event.get("body", "")
        if isinstance(body, str):
            if not body:
                return _response(400, {"error": "No input data provided", "status": "failed"})
            # Handle base64 encoded body (API Gateway)
            if event.get("isBase64Encoded"):
                body = base64.b64decode(body).decode("utf-8")
            input_data = json.loads(body)
        else:
            input_data = body

        if not input_data:
            return _response(400, {"error": "No input data provided", "status": "failed"})

        if not isinstance(input_data, dict):
            raise TypeError(f"Request body must be a JSON object, got: {type(input_data).__name__}")

        # Log request
        reference = input_data.get("reference", "Unknown")
        logger.info(f"Processing fee request: {reference}")

        result = action(input_data)

        logger.info(f"Fee request processed successfully: {reference}")

        return _response(200, result)

    except json.JSONDecodeError as e:
        logger.error(f"JSON parse error: {str(e)}")
        return _response(400, {"error": f"Invalid JSON: {str(e)}", "status": "failed"})

    except (ValueError, KeyError, TypeError) as e:
        # Validation errors from engine (missing fields, negative amounts, etc.)
        logger.error(f"Validation error: {str(e)}")
        return _response(400, {"error": f"Validation error: {str(e)}", "status": "validation_failed"})

    except Exception as e:
        # Unexpected errors - log details but return generic message to avoid information disclosure
        logger.error(f"Unexpected processing error: {str(e)}", exc_info=True)
        return _response(500, {"error": "An unexpected error occurred during processing", "status": "failed"})
