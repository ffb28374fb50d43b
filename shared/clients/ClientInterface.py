from abc import ABC, abstractmethod

import httpx
from httpx._types import QueryParamTypes, RequestContent
from typing import Any
from shared.models.config import EnvConfig
from shared.clients.models.RequestResult import RequestResult
from shared.helper.HelperClock import HelperClock
from shared.helper.HelperConfig import HelperConfig
from shared.helper.RateLimiter import RateLimiter


class ClientInterface(ABC):
    def __init__(self, helper_config: HelperConfig, clock: HelperClock | None = None):
        self.logging = helper_config.get_logger()
        self._helper_config = helper_config
        self.timeout = helper_config.get_number_val(f"{self.get_client_type().upper()}_TIMEOUT", default=30.0)

        # every outbound call of this client passes through one gate
        request_delay = helper_config.get_duration_val(f"{self.get_client_type().upper()}_REQUEST_DELAY_MS", default_ms=1000)
        self.rate_limiter = RateLimiter(delay=request_delay, clock=clock)

        # client and config
        self._client: httpx.AsyncClient | None = None
        self.validate_full_configuration()

    ##########################################
    ############### CHECKER ##################
    ##########################################

    def validate_full_configuration(self) -> None:
        """
        Validates that all required configuration values for the client are set and valid.

        Raises:
            ValueError: If any required configuration value is missing or invalid.
        """
        req_config = self._get_required_config()
        for config in req_config:
            _ = self.get_config_val(raw_key=config.env_key, default=config.default, val_type=config.val_type)

    ##########################################
    ################ GETTER ##################
    ##########################################

    ################ GENERAL ##################
    def get_client_type(self) -> str:
        """
        Returns the type of the client in lowercase. E.g. "store"
        """
        return self._get_client_type().lower()

    @abstractmethod
    def _get_client_type(self) -> str:
        """
        Returns the type of the client. E.g. "store"
        """
        pass

    def get_engine_name(self) -> str:
        """
        Returns the name of the engine used by the client. E.g. "ecwid"
        """
        return self._get_engine_name().lower()

    @abstractmethod
    def _get_engine_name(self) -> str:
        """
        Returns the name of the engine used by the client. E.g. "Ecwid"
        """
        pass

    ################ CONFIG ##################
    @abstractmethod
    def _get_required_config(self) -> list[EnvConfig]:
        """
        Returns all required configurations for the client.

        Returns:
            list[EnvConfig]: A list containing the details of each required configuration key.
        """
        pass

    def _get_config_key_name(self, raw_key: str) -> str:
        """
        Returns:
            str: The full configuration key name for the client. E.g. "STORE_ECWID_ACCESS_TOKEN"
        """
        key_prefix = f"{self.get_client_type().upper()}_{self.get_engine_name().upper()}"
        return f"{key_prefix}_{raw_key.upper()}"

    def get_config_val(self, raw_key: str, default: Any = None, val_type: str = "string") -> Any:
        """
        Retrieves the value of a configuration key for the client.

        Args:
            raw_key (str): The raw configuration key name
            default (Any): The default value to return if the configuration key is not set
            val_type (str): The type of the configuration value ("string", "number", "bool")
        """
        key = self._get_config_key_name(raw_key)
        if val_type == "string":
            return self._helper_config.get_string_val(key, default=default)
        elif val_type == "number":
            return self._helper_config.get_number_val(key, default=default)
        elif val_type == "bool":
            return self._helper_config.get_bool_val(key, default=default)
        else:
            raise ValueError(f"Unsupported config value type '{val_type}' for env key '{raw_key}' in {self.get_client_type().upper()} client '{self.get_engine_name()}'.")

    ################ AUTH ##################
    @abstractmethod
    def _get_auth_header(self) -> dict:
        """
        Returns the authentication header for the backend, if header auth is used.

        Returns:
            dict: A dictionary containing the auth header, or an empty dict
        """
        pass

    @abstractmethod
    def _get_auth_params(self) -> dict:
        """
        Returns the authentication query parameters for the backend, if query auth is used.
        They are appended after all other query parameters.

        Returns:
            dict: A dictionary containing the auth parameters, or an empty dict
        """
        pass

    def get_secret(self) -> str | None:
        """
        Returns the credential of the client, so it can be masked in logs.
        """
        return None

    ################ ENDPOINTS ##################
    @abstractmethod
    def _get_base_url(self) -> str:
        """
        Returns the base URL of the backend server from env variables

        Returns:
            str: The base URL of the backend (e.g. "https://app.ecwid.com/api/v3/12345")
        """
        pass

    def _get_default_headers(self) -> dict:
        """
        Returns the headers sent with every request.
        """
        return {
            "Content-Type": "application/json; charset=utf-8",
            "Cache-Control": "no-cache",
            "Accept-Encoding": "gzip",
        }

    ##########################################
    ############ CORE REQUESTS ###############
    ##########################################

    async def boot(self, transport: httpx.AsyncBaseTransport | None = None) -> None:
        """Initialise the HTTP client.

        Args:
            transport: Optional custom transport, e.g. ``httpx.MockTransport`` in tests.
        """
        self._client = httpx.AsyncClient(timeout=self.timeout, transport=transport)

    async def close(self) -> None:
        """Close the HTTP client and any other resources."""
        if self._client:
            await self._client.aclose()
            self._client = None

    def _build_url(self, endpoint: str) -> str:
        endpoint = "/" + endpoint.strip().lstrip("/") if endpoint.strip() else ""
        return f"{self._get_base_url().rstrip('/')}{endpoint}"

    def _build_params(self, params: QueryParamTypes | None) -> dict:
        merged: dict = dict(params) if params else {}
        merged.update(self._get_auth_params())
        return merged

    async def do_request(
        self,
        method: str = "GET",
        endpoint: str = "",
        params: QueryParamTypes | None = None,
        content: RequestContent | None = None,
        additional_headers: dict | None = None,
    ) -> RequestResult:
        """Send one rate-limited HTTP request to the backend and parse its JSON body.

        Transport errors, non-2xx responses and bodies that are not JSON are
        logged and returned as a failed RequestResult instead of being raised.

        Args:
            method: HTTP method (GET, POST, ...).
            endpoint: Path to append to the base URL (leading slash optional).
            params: URL query parameters. Auth parameters are appended after them.
            content: Raw request body, e.g. serialized JSON text.
            additional_headers: Extra headers that override the defaults.

        Returns:
            RequestResult: The parsed body on success, the failure reason otherwise.

        Raises:
            Exception: If the client is not initialised. Call boot() first.
        """
        if self._client is None:
            raise Exception("HTTP client not initialised. Call boot() before making requests.")

        url = self._build_url(endpoint)
        headers = self._get_default_headers()
        headers.update(self._get_auth_header())
        if additional_headers:
            headers.update(additional_headers)

        await self.rate_limiter.acquire()
        self.logging.debug("%s %s", method, url)

        try:
            response = await self._client.request(
                method,
                url,
                params=self._build_params(params),
                headers=headers,
                content=content,
                timeout=self.timeout,
            )
        except httpx.HTTPError as e:
            self.logging.error("Request %s %s failed: %s", method, url, e)
            return RequestResult.failure(url=url, error=f"{type(e).__name__}: {e}")

        if response.status_code >= 300:
            self.logging.error(
                "Request %s %s failed with status %d: %s",
                method,
                url,
                response.status_code,
                response.text[:200],
            )
            return RequestResult.failure(
                url=url,
                status_code=response.status_code,
                error=f"HTTP {response.status_code}: {response.text[:200]}",
            )

        try:
            data = response.json()
        except ValueError as e:
            self.logging.error("Response of %s %s is not valid JSON: %s", method, url, e)
            return RequestResult.failure(url=url, status_code=response.status_code, error=f"Invalid JSON body: {e}")

        return RequestResult.success(url=url, status_code=response.status_code, data=data)
