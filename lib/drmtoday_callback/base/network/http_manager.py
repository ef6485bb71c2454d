# drmtoday_callback/base/network/http_manager.py
from typing import Any, Dict, Mapping, Optional
from urllib.parse import urljoin

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..exceptions import NotFoundError, TransportError
from ..models.proxy_models import ProxyConfig, RequestConfig
from ..utils.environment import DEFAULT_HTTP_TIMEOUT, get_environment_manager, parse_bool
from ..utils.logger import logger

# Redirects that must keep the POST method and body
MANUAL_REDIRECT_CODES = (307, 308)

# Number of permitted manual redirects
MAX_MANUAL_REDIRECTS = 5

# Headers that are never written to the log
SENSITIVE_HEADERS = ("x-dt-auth-token", "dt-custom-data", "authorization")


class LicenseSession(requests.Session):
    """
    requests session that leaves 307/308 responses to the caller.

    301/302/303 are still followed by requests itself; 307/308 need the
    original body replayed, which HTTPManager.post does with a bounded count.
    """

    def get_redirect_target(self, resp):
        if resp.status_code in MANUAL_REDIRECT_CODES:
            return None
        return super().get_redirect_target(resp)


class HTTPManager:
    """
    HTTP request manager for license and provisioning requests

    Handles:
    - Proxy configuration per operation type
    - Manual 307/308 redirect following for POST requests
    - Mapping of HTTP failures to TransportError / NotFoundError
    - Request/response logging
    """

    def __init__(self, config: Optional[RequestConfig] = None):
        """
        Initialize HTTP manager

        Args:
            config: Request configuration including proxy settings
        """
        self.config = config or RequestConfig()
        self._session = None
        self._setup_session()

    def _setup_session(self) -> None:
        """Setup requests session with connection retry strategy"""
        if self._session:
            self._session.close()
        self._session = LicenseSession()

        # Only connection establishment is retried, never a sent request
        retry_strategy = Retry(
            total=self.config.max_retries,
            connect=self.config.max_retries,
            read=0,
            status=0,
        )

        adapter = HTTPAdapter(max_retries=retry_strategy)
        self._session.mount("http://", adapter)
        self._session.mount("https://", adapter)

    def post(
        self,
        url: str,
        data: bytes = b"",
        headers: Optional[Mapping[str, str]] = None,
        operation: str = "license",
    ) -> bytes:
        """
        POST ``data`` to ``url`` and return the response body.

        307 and 308 responses carrying a Location header are followed up to
        MAX_MANUAL_REDIRECTS times, re-sending the same body and headers.

        Args:
            url: Request URL
            data: Request body
            headers: Request headers, identical for every redirect hop
            operation: Operation type for proxy scoping

        Returns:
            Raw response body of the final 2xx response

        Raises:
            NotFoundError: On HTTP 404
            TransportError: On any other failure, including exhausted redirects
        """
        manual_redirect_count = 0
        while True:
            response = self._send(url, data, headers, operation)

            if 200 <= response.status_code < 300:
                return response.content

            # requests may already have followed 301/302/303 to another host
            url = response.url or url
            error = self._error_from_response(response, url)
            location = response.headers.get("Location")
            manually_redirect = (
                response.status_code in MANUAL_REDIRECT_CODES
                and bool(location)
                and manual_redirect_count < MAX_MANUAL_REDIRECTS
            )
            if not manually_redirect:
                if response.status_code in MANUAL_REDIRECT_CODES:
                    reason = "no Location header" if not location else "redirect limit reached"
                    logger.error(f"Not following HTTP {response.status_code} from {url}: {reason}")
                raise error

            manual_redirect_count += 1
            url = urljoin(url, location)
            logger.debug(
                f"Following HTTP {response.status_code} redirect "
                f"({manual_redirect_count}/{MAX_MANUAL_REDIRECTS}) -> {url}"
            )

    def _send(
        self,
        url: str,
        data: bytes,
        headers: Optional[Mapping[str, str]],
        operation: str,
    ) -> requests.Response:
        """Issue a single POST without interpreting the status code"""
        request_kwargs = self.config.get_request_kwargs(operation)
        if headers:
            request_kwargs["headers"].update(headers)

        self._log_request(url, operation, request_kwargs)

        try:
            response = self._session.request("POST", url, data=data, **request_kwargs)
        except requests.exceptions.ProxyError as e:
            logger.error(f"Proxy error for {operation} request to {url}: {e}")
            raise TransportError(f"Proxy error: {e}", url=url) from e
        except requests.exceptions.Timeout as e:
            logger.error(
                f"Timeout ({request_kwargs.get('timeout', 'unknown')}s) "
                f"for {operation} request to {url}: {e}"
            )
            raise TransportError(f"Timeout: {e}", url=url) from e
        except requests.exceptions.ConnectionError as e:
            logger.error(f"Connection error for {operation} request to {url}: {e}")
            raise TransportError(f"Connection error: {e}", url=url) from e
        except requests.exceptions.RequestException as e:
            logger.error(f"Request error for {operation} request to {url}: {e}")
            raise TransportError(f"Request error: {e}", url=url) from e

        self._log_response(response)
        return response

    @staticmethod
    def _error_from_response(response: requests.Response, url: str) -> TransportError:
        """Build the typed error for a non-2xx response"""
        status = response.status_code
        error_class = NotFoundError if status == 404 else TransportError
        return error_class(
            f"HTTP {status} for {url}",
            status_code=status,
            url=url,
            headers=response.headers,
        )

    def _log_request(self, url: str, operation: str, kwargs: Dict[str, Any]) -> None:
        """Log request details without sensitive header values"""
        proxy_info = " [proxy: none]"
        if self.config.proxy_config:
            if self.config.proxy_config.scope.should_use_proxy_for(operation):
                proxy_info = f" [proxy: {self.config.proxy_config.host}:{self.config.proxy_config.port}]"
            else:
                proxy_info = f" [proxy: disabled for operation '{operation}']"

        header_names = [
            f"{name}=***" if name.lower() in SENSITIVE_HEADERS else f"{name}={value}"
            for name, value in kwargs.get("headers", {}).items()
        ]

        # Truncate URL for readability if very long
        display_url = url if len(url) <= 100 else f"{url[:80]}...{url[-17:]}"

        logger.debug(
            f"POST {operation} -> {display_url}{proxy_info} "
            f"[timeout: {kwargs.get('timeout', self.config.timeout)}s] headers: {', '.join(header_names)}"
        )

    @staticmethod
    def _log_response(response: requests.Response) -> None:
        """Log response details with timing information"""
        elapsed = ""
        if getattr(response, "elapsed", None) is not None:
            elapsed = f" [{int(response.elapsed.total_seconds() * 1000)}ms]"

        content_type = response.headers.get("Content-Type", "unknown")
        logger.debug(
            f"Response {response.status_code} ({len(response.content)} bytes, {content_type}){elapsed}"
        )

    def close(self) -> None:
        """Close the session"""
        if self._session:
            self._session.close()

    def __enter__(self):
        """Context manager entry"""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit"""
        self.close()


class HTTPManagerFactory:
    """
    Factory for creating HTTP managers from the environment configuration
    """

    @staticmethod
    def create_from_environment(env_manager=None, **config_kwargs) -> HTTPManager:
        """
        Create HTTP manager configured from Kodi settings / environment variables

        Args:
            env_manager: EnvironmentManager to read from (global one if omitted)
            **config_kwargs: RequestConfig overrides

        Returns:
            Configured HTTPManager instance
        """
        if env_manager is None:
            env_manager = get_environment_manager()

        http_timeout = env_manager.get_config("http_timeout", DEFAULT_HTTP_TIMEOUT)
        try:
            timeout = int(http_timeout)
        except (TypeError, ValueError):
            logger.warning(f"Invalid http_timeout {http_timeout!r}, using {DEFAULT_HTTP_TIMEOUT}s")
            timeout = DEFAULT_HTTP_TIMEOUT

        defaults: Dict[str, Any] = {
            "timeout": timeout,
            "verify_ssl": parse_bool(env_manager.get_config("verify_ssl"), True),
        }

        proxy_url = env_manager.get_config("proxy_url")
        if proxy_url:
            defaults["proxy_config"] = ProxyConfig.from_url(proxy_url)

        defaults.update(config_kwargs)
        return HTTPManager(RequestConfig(**defaults))
