"""
Unit tests for scripts/health_check.py. HTTP calls are stubbed.
"""
import importlib.util
from pathlib import Path
import pytest
import requests

SCRIPT_PATH = Path(__file__).resolve().parent.parent / 'scripts' / 'health_check.py'


@pytest.fixture
def health_check():
    spec = importlib.util.spec_from_file_location('health_check', SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class FakeResponse:
    def __init__(self, status_code, payload=None):
        self.status_code = status_code
        self._payload = payload

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON object could be decoded")
        return self._payload


def stub_get(monkeypatch, result):
    calls = []

    def fake_get(url, timeout):
        calls.append(url)
        if isinstance(result, Exception):
            raise result
        return result

    monkeypatch.setattr(requests, 'get', fake_get)
    return calls


class TestCheckHealthEndpoint:
    """Tests for check_health_endpoint()."""

    def test_healthy(self, health_check, monkeypatch):
        calls = stub_get(monkeypatch, FakeResponse(200, {"status": "OK", "message": "Server is running"}))

        success, message = health_check.check_health_endpoint('https://api.example.com/')

        assert success
        assert calls == ['https://api.example.com/api/health']

    def test_wrong_status(self, health_check, monkeypatch):
        stub_get(monkeypatch, FakeResponse(503))

        success, message = health_check.check_health_endpoint('https://api.example.com')

        assert not success
        assert '503' in message

    def test_unexpected_body(self, health_check, monkeypatch):
        stub_get(monkeypatch, FakeResponse(200, {"status": "DEGRADED"}))

        success, message = health_check.check_health_endpoint('https://api.example.com')

        assert not success
        assert 'unexpected body' in message

    def test_invalid_json(self, health_check, monkeypatch):
        stub_get(monkeypatch, FakeResponse(200))

        success, message = health_check.check_health_endpoint('https://api.example.com')

        assert not success
        assert 'invalid JSON' in message

    @pytest.mark.parametrize('error, text', [
        (requests.exceptions.Timeout(), 'timed out'),
        (requests.exceptions.ConnectionError(), 'connection failed'),
    ])
    def test_network_errors(self, health_check, monkeypatch, error, text):
        stub_get(monkeypatch, error)

        success, message = health_check.check_health_endpoint('https://api.example.com')

        assert not success
        assert text in message


class TestMain:
    """Tests for the command line entry point."""

    def test_exit_code_zero_when_healthy(self, health_check, monkeypatch):
        stub_get(monkeypatch, FakeResponse(200, {"status": "OK", "message": "Server is running"}))

        assert health_check.main(['--url', 'https://api.example.com']) == 0

    def test_retries_then_fails(self, health_check, monkeypatch):
        calls = stub_get(monkeypatch, requests.exceptions.ConnectionError())
        monkeypatch.setattr(health_check.time, 'sleep', lambda seconds: None)

        exit_code = health_check.main(['--url', 'https://api.example.com', '--retry', '2', '--retry-delay', '0'])

        assert exit_code == 1
        assert len(calls) == 2
