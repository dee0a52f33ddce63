# tests/test_validator.py

import json
from unittest.mock import patch

import requests

from app.core.config import settings
from app.core.result import FailureKind
from app.modules.validator import services

VIES_BODY = {
    "isValid": True,
    "requestDate": "2024-03-15T10:00:00.000Z",
    "userError": "VALID",
    "name": "MUNICIPIO DE BRAGA",
    "address": "PRACA DO MUNICIPIO 4700-435 BRAGA",
    "vatNumber": "506901173",
}

def mock_response(status_code=200, body=None):
    response = requests.Response()
    response.status_code = status_code
    response.headers["Content-Type"] = "application/json"
    response._content = json.dumps(body).encode("utf-8") if body is not None else b"not json"
    return response

def test_build_vies_url_strips_the_tax_id():
    url = services.build_vies_url("  506901173 ")
    assert url == f"{settings.VIES_BASE_URL.rstrip('/')}/ms/{settings.VIES_COUNTRY_CODE}/vat/506901173"

@patch("app.modules.validator.services.requests.get")
def test_missing_tax_id_makes_no_request(mock_get, client):
    response = client.get("/api/validator")
    assert response.status_code == 400
    assert response.json() == {"error": "taxId is required"}

    response = client.get("/api/validator", params={"taxId": "   "})
    assert response.status_code == 400
    mock_get.assert_not_called()

@patch("app.modules.validator.services.requests.get")
def test_upstream_body_is_relayed(mock_get, client):
    mock_get.return_value = mock_response(200, VIES_BODY)

    response = client.get("/api/validator", params={"taxId": "506901173"})
    assert response.status_code == 200
    assert response.json() == VIES_BODY

    mock_get.assert_called_once()
    args, kwargs = mock_get.call_args
    assert args[0].endswith("/vat/506901173")
    assert kwargs["headers"]["Accept"] == "application/json"
    assert kwargs["headers"]["User-Agent"] == settings.VIES_USER_AGENT

@patch("app.modules.validator.services.requests.get")
def test_upstream_error_status_is_a_generic_error(mock_get, client):
    mock_get.return_value = mock_response(503, {"actionSucceed": False})

    response = client.get("/api/validator", params={"taxId": "506901173"})
    assert response.status_code == 500
    assert response.json() == {"error": services.GENERIC_ERROR}
    assert mock_get.call_count == 1

@patch("app.modules.validator.services.requests.get")
def test_transport_error_is_a_generic_error(mock_get, client):
    mock_get.side_effect = requests.ConnectionError("connection refused")

    response = client.get("/api/validator", params={"taxId": "506901173"})
    assert response.status_code == 500
    assert response.json() == {"error": services.GENERIC_ERROR}

@patch("app.modules.validator.services.requests.get")
def test_unreadable_body_is_a_failure(mock_get):
    mock_get.return_value = mock_response(200)

    result = services.lookup_tax_id("506901173")
    assert not result.ok
    assert result.kind == FailureKind.FAILURE
    assert result.error == services.GENERIC_ERROR

@patch("app.modules.validator.services.requests.get")
def test_redirect_status_is_a_generic_error(mock_get, client):
    # requests treats any status below 400 as ok, the proxy only accepts 2xx
    mock_get.return_value = mock_response(300, {"isValid": True})

    response = client.get("/api/validator", params={"taxId": "506901173"})
    assert response.status_code == 500
    assert response.json() == {"error": services.GENERIC_ERROR}

    assert services.lookup_tax_id("506901173").kind == FailureKind.FAILURE
