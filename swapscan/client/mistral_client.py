"""
Client for the Mistral chat completions endpoint.

Sends the rendered swap report as a prompt and returns the model's
commentary as plain text.
"""

import logging

import requests

from ..config import MISTRAL_API_KEY, MISTRAL_API_URL, MISTRAL_MODEL
from ..errors import TextGenerationError

logger = logging.getLogger(__name__)

PROMPT_PREFIX = (
    "Analyze the following swap data and judge which price is currently the most "
    "suitable for providing liquidity:\n"
)


class MistralClient:
    def __init__(self, api_key=None, api_url=None, model=None, timeout=60):
        self.api_key = api_key or MISTRAL_API_KEY
        self.api_url = api_url or MISTRAL_API_URL
        self.model = model or MISTRAL_MODEL
        self.timeout = timeout
        if not self.api_key:
            raise ValueError("MISTRAL_API_KEY is not set")

    def build_request(self, text):
        return {
            'model': self.model,
            'messages': [
                {'role': 'user', 'content': PROMPT_PREFIX + text},
            ],
        }

    def analyze(self, text):
        """
        Ask the model to comment on a report.

        Args:
            text: Rendered report text

        Returns:
            The model's reply
        """
        headers = {
            'Content-Type': 'application/json',
            'Authorization': f'Bearer {self.api_key}',
        }
        try:
            response = requests.post(self.api_url, json=self.build_request(text), headers=headers,
                                     timeout=self.timeout)
        except requests.RequestException as e:
            raise TextGenerationError(f"HTTP request failed: {e}") from e

        logger.info(f"Mistral API status: {response.status_code}")
        if response.status_code == 401:
            raise TextGenerationError("API key is invalid or not set correctly")
        if response.status_code != 200:
            raise TextGenerationError(f"Mistral API error: {response.status_code} - {response.text}")

        try:
            data = response.json()
        except ValueError as e:
            raise TextGenerationError(f"could not parse response: {e}") from e

        choices = data.get('choices') if isinstance(data, dict) else None
        if not choices:
            raise TextGenerationError("response contained no choices")
        try:
            return choices[0]['message']['content']
        except (KeyError, IndexError, TypeError) as e:
            raise TextGenerationError(f"unexpected response shape: {e!r}") from e
