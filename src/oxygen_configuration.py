import os
from dataclasses import dataclass

import structlog
from dotenv import find_dotenv, load_dotenv

from http_exception import OxygenException


class OxygenConfigurationException(OxygenException):
    @property
    def default_message(self) -> str:
        return "Invalid Oxygen client configuration"


@dataclass(frozen=True)
class OxygenConfiguration:
    endpoint: str
    token: str = ""
    http_library: str = "requests"
    log_requests: bool = False
    content_caching: bool = False
    timeout_seconds: float | None = None

    @staticmethod
    def from_environment(use_dotenv: bool = True) -> "OxygenConfiguration":
        """Read 'OXYGEN_*' environment variables, which can also come from a '.env' file in the working directory"""
        if use_dotenv:
            load_dotenv(find_dotenv(usecwd=True))

        endpoint = os.environ.get("OXYGEN_ENDPOINT")
        if not endpoint:
            raise OxygenConfigurationException("Please provide the 'OXYGEN_ENDPOINT' environment variable with the URL of the Oxygen service")

        timeout_text = os.environ.get("OXYGEN_TIMEOUT_SECONDS")
        timeout_seconds = None
        if timeout_text:
            try:
                timeout_seconds = float(timeout_text)
            except ValueError:
                raise OxygenConfigurationException(f"'OXYGEN_TIMEOUT_SECONDS' must be a number of seconds, got {timeout_text!r}")

        configuration = OxygenConfiguration(
            endpoint=endpoint,
            # Without a token only public content is accessible
            token=os.environ.get("OXYGEN_TOKEN", ""),
            http_library=os.environ.get("OXYGEN_HTTP_LIBRARY", "requests"),
            log_requests=os.environ.get("OXYGEN_LOG_REQUESTS") == "1",
            content_caching=os.environ.get("OXYGEN_CONTENT_CACHING") == "1",
            timeout_seconds=timeout_seconds,
        )
        structlog.getLogger(OxygenConfiguration.__name__).debug(
            "Loaded configuration",
            endpoint=configuration.endpoint,
            token_supplied=bool(configuration.token),
            http_library=configuration.http_library,
            log_requests=configuration.log_requests,
            content_caching=configuration.content_caching,
            timeout_seconds=configuration.timeout_seconds,
        )
        return configuration
