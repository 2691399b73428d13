"""Push delivery adapters."""

import logging
from dataclasses import dataclass

import httpx

from nutrilog.services.notifications import PushClient

logger = logging.getLogger(__name__)


@dataclass
class HttpxFcmPushClient(PushClient):
    """Firebase Cloud Messaging HTTP v1 client implemented with httpx."""

    project_id: str
    access_token: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, project_id: str, access_token: str) -> "HttpxFcmPushClient":
        """Create an FCM client with a managed httpx session."""
        return cls(
            project_id=project_id,
            access_token=access_token,
            http_client=httpx.AsyncClient(),
        )

    async def send(
        self, token: str, title: str, body: str, data: dict[str, str]
    ) -> None:
        """Send one notification message to a device token."""
        url = (
            f"https://fcm.googleapis.com/v1/projects/{self.project_id}/messages:send"
        )
        payload = {
            "message": {
                "token": token,
                "notification": {"title": title, "body": body},
                "data": data,
            }
        }
        response = await self.http_client.post(
            url,
            json=payload,
            headers={"Authorization": f"Bearer {self.access_token}"},
            timeout=10,
        )
        response.raise_for_status()

    async def close(self) -> None:
        """Close the underlying HTTP client session."""
        await self.http_client.aclose()


@dataclass
class LoggingPushClient(PushClient):
    """Stand-in transport used when no push credentials are configured."""

    async def send(
        self, token: str, title: str, body: str, data: dict[str, str]
    ) -> None:
        logger.info("Push delivery disabled, dropping message", extra={"title": title})

    async def close(self) -> None:
        return None
