# okta_suspend/infrastructure/okta/users_client.py

import re
from urllib.parse import quote

import httpx

from okta_suspend.domain.models import SuspendRequest

USERS_PATH = "/api/v1/users"
SUSPEND_PATH = "/lifecycle/suspend"

_DOT_SEGMENT = re.compile(r"^\.+$")


def encode_user_id(user_id: str) -> str:
    """
    Percent-encode a user id as a single path segment. Reserved characters, "/" and "@"
    included, are escaped; an all-dots id is escaped too so it cannot become a dot-segment.
    """
    encoded = quote(user_id, safe="")
    if _DOT_SEGMENT.match(encoded):
        encoded = encoded.replace(".", "%2E")
    return encoded


class OktaUsersClient:
    """
    Okta Users API. Returns raw responses; the suspend service classifies status codes.
    Timeouts are the transport's.
    """

    def __init__(self, http_client: httpx.AsyncClient) -> None:
        self._http = http_client

    @staticmethod
    def user_url(address: str, user_id: str) -> str:
        return f"{address}{USERS_PATH}/{encode_user_id(user_id)}"

    async def get_user(self, request: SuspendRequest) -> httpx.Response:
        return await self._http.get(
            self.user_url(request.address, request.user_id),
            headers={
                "Authorization": request.authorization.value,
                "Accept": "application/json",
            },
        )

    async def suspend_user(self, request: SuspendRequest) -> httpx.Response:
        return await self._http.post(
            f"{self.user_url(request.address, request.user_id)}{SUSPEND_PATH}",
            headers={
                "Authorization": request.authorization.value,
                "Accept": "application/json",
                "Content-Type": "application/json",
            },
        )
