"""SSL-related utility functions for MCP Redmine."""

import logging
import ssl
from typing import Any
from urllib.parse import urlparse

from requests.adapters import HTTPAdapter
from requests.sessions import Session
from urllib3.poolmanager import PoolManager

logger = logging.getLogger("mcp-redmine")


def _unverified_context() -> ssl.SSLContext:
    context = ssl.create_default_context()
    context.check_hostname = False
    context.verify_mode = ssl.CERT_NONE
    return context


class SSLIgnoreAdapter(HTTPAdapter):
    """Transport adapter for trackers behind self-signed certificates.

    Neither the certificate chain nor the hostname is checked.
    """

    def init_poolmanager(
        self, connections: int, maxsize: int, block: bool = False, **pool_kwargs: Any
    ) -> None:
        pool_kwargs["ssl_context"] = _unverified_context()
        self.poolmanager = PoolManager(
            num_pools=connections, maxsize=maxsize, block=block, **pool_kwargs
        )

    def cert_verify(self, conn: Any, url: str, verify: bool, cert: Any | None) -> None:
        super().cert_verify(conn, url, verify=False, cert=cert)


def configure_ssl_verification(
    service_name: str, url: str, session: Session, ssl_verify: bool
) -> None:
    """Disable certificate checks for one host when verification is turned off.

    The adapter is mounted for ``http://`` and ``https://`` prefixes of the
    host in ``url`` only; requests to any other host keep the default adapter.

    Args:
        service_name: Name used in the warning (e.g., "Redmine")
        url: The base URL of the service
        session: The requests session to configure
        ssl_verify: Whether SSL verification should be enabled
    """
    if ssl_verify:
        return

    host = urlparse(url).netloc
    logger.warning(
        f"{service_name} SSL verification disabled for {host}. This is insecure and should only be used in testing environments."
    )
    adapter = SSLIgnoreAdapter()
    for scheme in ("https", "http"):
        session.mount(f"{scheme}://{host}", adapter)
