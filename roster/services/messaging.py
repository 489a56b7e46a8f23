from typing import Dict, Any, Iterable
import logging

import httpx

from .models import BulkSendResult, CallResult

logger = logging.getLogger(__name__)

# Marks a field the caller did not send; such keys are left out of the payload
UNSET = object()


class MessagingClient:
    """Relay for text messages through the WhatsApp Cloud API"""

    def __init__(self, client: httpx.AsyncClient, api_url: str, api_token: str):
        self.client = client
        self.api_url = api_url
        self.headers = {
            "Authorization": f"Bearer {api_token}",
            "Content-Type": "application/json",
        }

    @staticmethod
    def build_payload(to: Any = UNSET, body: Any = UNSET) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"messaging_product": "whatsapp"}
        if to is not UNSET:
            payload["to"] = to
        payload["type"] = "text"
        payload["text"] = {} if body is UNSET else {"body": body}
        return payload

    async def send_text(self, to: Any = UNSET, body: Any = UNSET) -> CallResult:
        """
        Send one text message.
        A non-2xx answer is EXTERNAL with the provider's error body (JSON if it parses, raw text otherwise),
        a transport failure is UNEXPECTED with the error description.

        """
        try:
            response = await self.client.post(
                self.api_url, json=self.build_payload(to, body), headers=self.headers
            )
            response.raise_for_status()
            return CallResult.success(_body(response))
        except httpx.HTTPStatusError as e:
            return CallResult.external(_body(e.response))
        except Exception as e:
            return CallResult.unexpected(str(e))

    async def send_bulk(self, numbers: Iterable[Any], body: Any = UNSET) -> BulkSendResult:
        """
        Send the same text to each number in order, one at a time.
        Each send is awaited before the next starts; a failure is logged, counted and the loop continues.

        """
        result = BulkSendResult()
        for number in numbers:
            outcome = await self.send_text(number, body)
            if outcome.ok:
                result.successful += 1
            else:
                logger.error(f"Failed to send message to {number}: {outcome.error}")
                result.failed += 1
        return result


def _body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text
