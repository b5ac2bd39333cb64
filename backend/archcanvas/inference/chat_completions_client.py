import re

import requests

from archcanvas.config import LLM_API_KEY, LLM_TIMEOUT
from archcanvas.ir.errors import UpstreamError


class ChatCompletionsClient:
    def __init__(
        self,
        base_url: str,
        model: str,
        temperature: float = 0.2,
        api_key: str = LLM_API_KEY,
        timeout: int = LLM_TIMEOUT,
    ):
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.temperature = temperature
        self.api_key = api_key
        self.timeout = timeout

    def generate(self, messages) -> str:
        url = f"{self.base_url}/chat/completions"

        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        try:
            response = requests.post(
                url,
                json={
                    "model": self.model,
                    "messages": messages,
                    "temperature": self.temperature,
                },
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            reason = e.response.reason if e.response is not None else ""
            raise UpstreamError(f"LLM API error: {status} {reason}".strip(), status) from e
        except requests.RequestException as e:
            raise UpstreamError(f"LLM API unreachable: {e}") from e

        try:
            content = response.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise UpstreamError("Invalid response from LLM API") from e

        # "content": null is a legal reply (refusals, tool calls)
        if not isinstance(content, str):
            raise UpstreamError("Invalid response from LLM API")

        #  STRIP MARKDOWN FENCES
        content = re.sub(r"^```(?:json)?\s*", "", content.strip())
        content = re.sub(r"\s*```$", "", content.strip())

        return content
