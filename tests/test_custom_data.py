import base64
import json
import re

import pytest

from drmtoday_callback import CustomDataEncodingError, SessionConfig
from drmtoday_callback.base.utils import REQUEST_ID_SIZE, generate_request_id
from drmtoday_callback.drmtoday import encode_custom_data
from drmtoday_callback.drmtoday.custom_data import get_custom_data_json


def test_custom_data_round_trip():
    config = SessionConfig("https://lic.drmtoday.com", merchant="m1", user_id="u1", session_id="s1")

    decoded = json.loads(base64.b64decode(encode_custom_data(config)))

    assert decoded == {"userId": "u1", "sessionId": "s1", "merchant": "m1"}


def test_custom_data_is_compact_and_unwrapped():
    config = SessionConfig("https://lic.drmtoday.com", merchant="m" * 200, user_id="u" * 200, session_id="s" * 200)

    assert " " not in get_custom_data_json(config)
    assert "\n" not in encode_custom_data(config)


def test_unserializable_values_are_fatal():
    config = SessionConfig("https://lic.drmtoday.com", merchant=object(), user_id="u1", session_id="s1")

    with pytest.raises(CustomDataEncodingError):
        encode_custom_data(config)


def test_request_id_is_lowercase_hex():
    request_id = generate_request_id()

    assert len(request_id) == REQUEST_ID_SIZE * 2
    assert re.fullmatch(r"[0-9a-f]{32}", request_id)


def test_request_ids_differ():
    assert generate_request_id() != generate_request_id()
