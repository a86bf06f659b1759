"""Tests for AWS Lambda handler."""

import base64
import json

from lambda_handler import lambda_handler


class TestLambdaHandler:
    """Test the Lambda handler routes and responses."""

    def test_health_check(self):
        """GET /health returns healthy status."""
        event = {"httpMethod": "GET", "path": "/health"}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 200
        body = json.loads(response["body"])
        assert body["status"] == "healthy"

    def test_api_info(self):
        """GET /api returns API information."""
        event = {"httpMethod": "GET", "path": "/api"}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 200
        body = json.loads(response["body"])
        assert body["status"] == "ok"
        assert "calculate_fee" in body["endpoints"]

    def test_tiers(self):
        """GET /tiers returns the tier schedule."""
        event = {"httpMethod": "GET", "path": "/tiers"}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 200
        body = json.loads(response["body"])
        assert len(body["tiers"]) == 5

    def test_cors_preflight(self):
        """OPTIONS requests return CORS headers."""
        event = {"httpMethod": "OPTIONS", "path": "/calculate_fee"}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 200
        assert "Access-Control-Allow-Origin" in response["headers"]
        assert "Access-Control-Allow-Methods" in response["headers"]

    def test_not_found(self):
        """Unknown paths return 404."""
        event = {"httpMethod": "GET", "path": "/unknown"}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 404

    def test_calculate_fee_success(self):
        """POST /calculate_fee prices a valid transaction."""
        payload = {"amount": 100, "monthly_volume": 500, "reference": "lambda-test"}

        event = {"httpMethod": "POST", "path": "/calculate_fee", "body": json.dumps(payload)}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 200
        body = json.loads(response["body"])
        assert body["fee"]["tier_name"] == "Starter"
        assert body["fee"]["fee_amount"]["value"] == 30.0
        assert body["fee"]["net_amount"]["value"] == 70.0

    def test_calculate_fee_base64_body(self):
        """Base64-encoded bodies from API Gateway are decoded."""
        payload = json.dumps({"amount": 100, "monthly_volume": 60000}).encode("utf-8")
        event = {
            "httpMethod": "POST",
            "path": "/calculate_fee",
            "body": base64.b64encode(payload).decode("ascii"),
            "isBase64Encoded": True,
        }
        response = lambda_handler(event, None)

        assert response["statusCode"] == 200
        assert json.loads(response["body"])["fee"]["tier_name"] == "Enterprise"

    def test_tier_progress(self):
        """POST /tier_progress reports the next tier."""
        event = {"httpMethod": "POST", "path": "/tier_progress", "body": json.dumps({"monthly_volume": 900})}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 200
        body = json.loads(response["body"])
        assert body["next_tier"]["name"] == "Growing"
        assert body["volume_to_next_tier"] == 101.0

    def test_calculate_fee_empty_body(self):
        """POST /calculate_fee with empty body returns 400."""
        event = {"httpMethod": "POST", "path": "/calculate_fee", "body": ""}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 400
        body = json.loads(response["body"])
        assert "error" in body

    def test_calculate_fee_invalid_json(self):
        """POST /calculate_fee with invalid JSON returns 400."""
        event = {"httpMethod": "POST", "path": "/calculate_fee", "body": "not valid json"}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 400
        body = json.loads(response["body"])
        assert "Invalid JSON" in body["error"]

    def test_calculate_fee_validation_error(self):
        """Negative amounts return 400 validation_failed."""
        payload = {"amount": -25, "monthly_volume": 100}

        event = {"httpMethod": "POST", "path": "/calculate_fee", "body": json.dumps(payload)}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 400
        body = json.loads(response["body"])
        assert body["status"] == "validation_failed"

    def test_calculate_fee_missing_field(self):
        """Missing monthly_volume returns 400 validation_failed."""
        event = {"httpMethod": "POST", "path": "/calculate_fee", "body": json.dumps({"amount": 10})}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 400
        assert json.loads(response["body"])["status"] == "validation_failed"

    def test_http_api_format(self):
        """Supports HTTP API v2 event format."""
        event = {"requestContext": {"http": {"method": "GET"}}, "rawPath": "/health"}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 200

    def test_calculate_fee_non_object_body(self):
        """A JSON array body returns 400 validation_failed."""
        for body in ("[1]", "5"):
            event = {"httpMethod": "POST", "path": "/calculate_fee", "body": body}
            response = lambda_handler(event, None)

            assert response["statusCode"] == 400
            assert json.loads(response["body"])["status"] == "validation_failed"

    def test_tier_progress_non_object_body(self):
        event = {"httpMethod": "POST", "path": "/tier_progress", "body": "[900]"}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 400
        assert json.loads(response["body"])["status"] == "validation_failed"

    def test_calculate_fee_amount_too_large(self):
        """Amounts beyond the pricing limit return 400, not 500."""
        payload = {"amount": "1e27", "monthly_volume": 0}
        event = {"httpMethod": "POST", "path": "/calculate_fee", "body": json.dumps(payload)}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 400
        assert "amount cannot exceed" in json.loads(response["body"])["error"]
