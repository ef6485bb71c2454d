import os
import tempfile

# Keep the environment manager and log file out of the real profile directory
os.environ["XDG_CONFIG_HOME"] = tempfile.mkdtemp(prefix="drmtoday-callback-tests-")
for _name in list(os.environ):
    if _name.startswith("DRMTODAY_"):
        del os.environ[_name]

import pytest

from drmtoday_callback import DrmtodayCallback, DrmtodayEnvironment, SessionConfig
from drmtoday_callback.base.network import HTTPManager
from drmtoday_callback.drmtoday import LicenseRequestBuilder

STAGING = DrmtodayEnvironment.STAGING.value
WIDEVINE_URL = f"{STAGING}/license-proxy-widevine/cenc/"
PLAYREADY_URL = f"{STAGING}/license-proxy-headerauth/drmtoday/RightsManager.asmx"
REQUEST_ID = "00112233445566778899aabbccddeeff"


class FakeEnvironment:
    """Stand-in for EnvironmentManager.get_config"""

    def __init__(self, **values):
        self.values = values

    def get_config(self, key, default=None):
        value = self.values.get(key)
        return default if value is None else value


@pytest.fixture
def make_environment():
    return FakeEnvironment


@pytest.fixture
def session_config():
    return SessionConfig(
        drmtoday_url=STAGING,
        merchant="m1",
        user_id="u1",
        session_id="s1",
    )


@pytest.fixture
def callback(session_config):
    """Configured callback with a fixed logRequestId"""
    cb = DrmtodayCallback(
        http_manager=HTTPManager(),
        config=session_config,
        request_builder=LicenseRequestBuilder(request_id_factory=lambda: REQUEST_ID),
    )
    yield cb
    cb.close()
