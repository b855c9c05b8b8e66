from unittest.mock import MagicMock, patch

import pytest
import requests

from swapscan.client.mistral_client import PROMPT_PREFIX, MistralClient
from swapscan.errors import TextGenerationError


def make_response(status_code=200, payload=None):
    response = MagicMock()
    response.status_code = status_code
    response.text = "error body"
    response.json.return_value = payload if payload is not None else {}
    return response


@pytest.fixture
def client():
    return MistralClient(api_key="test-key", api_url="https://api.example/chat", model="mistral-tiny")


def test_analyze_posts_report(client):
    payload = {'choices': [{'message': {'role': 'assistant', 'content': "Around 3005 USDC."}}]}
    with patch("swapscan.client.mistral_client.requests.post", return_value=make_response(200, payload)) as post:
        answer = client.analyze("=== report ===")

    assert answer == "Around 3005 USDC."
    args, kwargs = post.call_args
    assert args[0] == "https://api.example/chat"
    assert kwargs['headers']['Authorization'] == "Bearer test-key"
    assert kwargs['json'] == {
        'model': "mistral-tiny",
        'messages': [{'role': 'user', 'content': PROMPT_PREFIX + "=== report ==="}],
    }


def test_invalid_key(client):
    with patch("swapscan.client.mistral_client.requests.post", return_value=make_response(401)):
        with pytest.raises(TextGenerationError, match="API key"):
            client.analyze("report")


def test_server_error(client):
    with patch("swapscan.client.mistral_client.requests.post", return_value=make_response(500)):
        with pytest.raises(TextGenerationError, match="500"):
            client.analyze("report")


def test_transport_error(client):
    with patch("swapscan.client.mistral_client.requests.post",
               side_effect=requests.ConnectionError("unreachable")):
        with pytest.raises(TextGenerationError):
            client.analyze("report")


def test_empty_choices(client):
    with patch("swapscan.client.mistral_client.requests.post",
               return_value=make_response(200, {'choices': []})):
        with pytest.raises(TextGenerationError):
            client.analyze("report")


def test_requires_api_key():
    with patch("swapscan.client.mistral_client.MISTRAL_API_KEY", None):
        with pytest.raises(ValueError):
            MistralClient(api_key=None)


@pytest.mark.parametrize("payload", [
    {'choices': [{'delta': {}}]},
    {'choices': [None]},
    {'choices': [{'message': "text"}]},
    ["not", "an", "object"],
])
def test_malformed_payload(client, payload):
    with patch("swapscan.client.mistral_client.requests.post", return_value=make_response(200, payload)):
        with pytest.raises(TextGenerationError):
            client.analyze("report")
