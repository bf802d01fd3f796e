from unittest.mock import Mock

import pytest
import requests

from wordcrawl.exceptions import HttpFetchError
from wordcrawl.services.http_service import HttpService


def test_fetch_success():
    mock_http_client = Mock()
    mock_http_client.return_value.status_code = 200
    mock_http_client.return_value.text = 'hello world'
    http = HttpService(user_agent='TestAgent', http_client=mock_http_client)
    response = http.fetch('http://example.com')
    assert response.status_code == 200
    assert response.text == 'hello world'
    assert response.url == 'http://example.com'
    assert response.ok


def test_fetch_sends_user_agent_and_timeout():
    mock_http_client = Mock()
    mock_http_client.return_value.status_code = 200
    mock_http_client.return_value.text = ''
    http = HttpService(user_agent='TestAgent', http_client=mock_http_client, timeout=3)
    http.fetch('http://example.com')
    mock_http_client.assert_called_once_with(
        'http://example.com', headers={'User-Agent': 'TestAgent'}, timeout=3
    )


def test_fetch_uses_final_url_after_redirect():
    mock_http_client = Mock()
    mock_http_client.return_value.status_code = 200
    mock_http_client.return_value.text = ''
    mock_http_client.return_value.url = 'https://example.com/home'
    http = HttpService(user_agent='TestAgent', http_client=mock_http_client)
    assert http.fetch('http://example.com').url == 'https://example.com/home'


def test_fetch_wraps_requests_exception():
    mock_http_client = Mock()
    mock_http_client.side_effect = requests.exceptions.Timeout("timed out")
    http = HttpService(user_agent='TestAgent', http_client=mock_http_client)

    with pytest.raises(HttpFetchError) as exc:
        http.fetch('http://example.com')
    assert "http://example.com" in str(exc.value)
    assert isinstance(exc.value.original, requests.exceptions.Timeout)


def test_fetch_content_type_from_headers():
    mock_http_client = Mock()
    mock_http_client.return_value.status_code = 404
    mock_http_client.return_value.text = '<html>missing</html>'
    mock_http_client.return_value.headers = {'Content-Type': 'text/html; charset=utf-8'}
    http = HttpService(user_agent='TestAgent', http_client=mock_http_client)
    response = http.fetch('http://example.com')
    assert response.content_type == 'text/html; charset=utf-8'
    assert not response.ok
