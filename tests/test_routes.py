import io
import json
from wsgiref.util import setup_testing_defaults

import pytest
from bottle import Bottle

from routes import setup_config_routes, setup_drm_routes

WIDEVINE_URL = "https://lic.staging.drmtoday.com/license-proxy-widevine/cenc/"
PLAYREADY_URL = "https://lic.staging.drmtoday.com/license-proxy-headerauth/drmtoday/RightsManager.asmx"


@pytest.fixture
def app(callback):
    application = Bottle()
    setup_drm_routes(application, callback)
    setup_config_routes(application, callback)
    return application


def call(app, method, path, body=b"", query="", content_type=None):
    """Drive the bottle app through WSGI and return (status, headers, body)"""
    environ = {}
    setup_testing_defaults(environ)
    environ.update({
        "REQUEST_METHOD": method,
        "PATH_INFO": path,
        "QUERY_STRING": query,
        "CONTENT_LENGTH": str(len(body)),
        "wsgi.input": io.BytesIO(body),
    })
    if content_type:
        environ["CONTENT_TYPE"] = content_type

    captured = {}

    def start_response(status, headers, exc_info=None):
        captured["status"] = int(status.split()[0])
        captured["headers"] = dict(headers)

    result = b"".join(app(environ, start_response))
    return captured["status"], captured["headers"], result


def test_widevine_license(app, requests_mock):
    requests_mock.post(WIDEVINE_URL, json={"license": "QUJD"})

    status, headers, body = call(app, "POST", "/api/drm/widevine/license", body=b"challenge")

    assert status == 200
    assert body == b"ABC"
    assert headers["Content-Type"].startswith("application/octet-stream")
    assert requests_mock.last_request.body == b"challenge"


def test_playready_license_by_uuid(app, requests_mock):
    requests_mock.post(PLAYREADY_URL, content=b"<license/>")

    status, headers, body = call(
        app, "POST", "/api/drm/9a04f079-9840-4286-ab92-e65be0885f95/license", body=b"<challenge/>"
    )

    assert status == 200
    assert body == b"<license/>"
    assert headers["Content-Type"].startswith("text/xml")


def test_unknown_system(app, requests_mock):
    status, _, body = call(app, "POST", "/api/drm/fairplay/license", body=b"c")

    assert status == 400
    assert json.loads(body)["system"] == "fairplay"
    assert requests_mock.call_count == 0


def test_empty_challenge(app):
    status, _, _ = call(app, "POST", "/api/drm/widevine/license")
    assert status == 400


def test_failed_acquisition_is_bad_gateway(app, requests_mock):
    requests_mock.post(WIDEVINE_URL, status_code=404)

    status, _, body = call(app, "POST", "/api/drm/widevine/license", body=b"challenge")

    assert status == 502
    assert json.loads(body)["error"] == "License acquisition failed"


def test_provision(app, requests_mock):
    target = "https://www.googleapis.com/certificateprovisioning/v1/devicecertificates/create?key=k"
    requests_mock.post(target, content=b"cert")

    status, _, body = call(
        app, "POST", "/api/drm/provision",
        body=b"payload",
        query="url=https%3A%2F%2Fwww.googleapis.com%2Fcertificateprovisioning%2Fv1%2Fdevicecertificates%2Fcreate%3Fkey%3Dk",
    )

    assert status == 200
    assert body == b"cert"
    assert requests_mock.last_request.url == target + "&signedRequest=payload"


def test_provision_requires_url(app):
    status, _, _ = call(app, "POST", "/api/drm/provision", body=b"payload")
    assert status == 400


def test_get_config_masks_token(app, callback):
    callback.configure("https://lic.staging.drmtoday.com", "m1", "u1", "s1", auth_token="secret")

    status, _, body = call(app, "GET", "/api/config")

    payload = json.loads(body)
    assert status == 200
    assert payload["configured"] is True
    assert payload["config"]["auth_token"] == "***"


def test_post_config(app, callback):
    data = json.dumps({"environment": "test", "merchant": "m9", "user_id": "u9", "session_id": "s9"}).encode()

    status, _, body = call(app, "POST", "/api/config", body=data, content_type="application/json")

    assert status == 200
    assert json.loads(body)["success"] is True
    assert callback.config.drmtoday_url == "https://lic.test.drmtoday.com"
    assert callback.config.merchant == "m9"


def test_post_config_missing_field(app):
    data = json.dumps({"environment": "test", "merchant": "m9", "user_id": "u9"}).encode()

    status, _, body = call(app, "POST", "/api/config", body=data, content_type="application/json")

    assert status == 400
    assert json.loads(body)["field"] == "session_id"


def test_post_config_requires_object(app):
    status, _, _ = call(app, "POST", "/api/config", body=b"[]", content_type="application/json")
    assert status == 400
