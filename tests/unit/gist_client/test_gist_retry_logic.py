"""Unit tests for gist_client.retry_logic module."""

from unittest.mock import MagicMock, patch

import pytest

from src.gist_client.errors import APIAccessError
from src.gist_client.retry_logic import _is_rate_limit_error, retry_on_rate_limit


class TestIsRateLimitError:
    """Test cases for _is_rate_limit_error function."""

    def test_detects_status_code_attribute(self):
        error = Exception("API error")
        error.status_code = 429
        assert _is_rate_limit_error(error) is True

    def test_detects_response_status_code_attribute(self):
        error = Exception("API error")
        error.response = MagicMock()
        error.response.status_code = 429
        assert _is_rate_limit_error(error) is True

    def test_detects_message_patterns(self):
        assert _is_rate_limit_error(Exception("Too many requests")) is True
        assert _is_rate_limit_error(Exception("API rate limit exceeded for user")) is True

    def test_other_errors_are_not_rate_limits(self):
        error = Exception("Not found")
        error.status_code = 404
        assert _is_rate_limit_error(error) is False


class TestRetryOnRateLimit:
    """Test cases for retry_on_rate_limit function."""

    def test_success_on_first_attempt(self):
        mock_func = MagicMock(return_value="success")

        assert retry_on_rate_limit(mock_func, "a", k="v") == "success"
        mock_func.assert_called_once_with("a", k="v")

    @patch('src.gist_client.retry_logic.time.sleep')
    def test_backs_off_exponentially(self, mock_sleep):
        limited = Exception("rate limit exceeded")
        mock_func = MagicMock(side_effect=[limited, limited, limited, "ok"])

        assert retry_on_rate_limit(mock_func) == "ok"
        assert [c.args[0] for c in mock_sleep.call_args_list] == [1, 2, 4]

    @patch('src.gist_client.retry_logic.time.sleep')
    def test_gives_up_after_max_retries(self, mock_sleep):
        mock_func = MagicMock(side_effect=Exception("too many requests"))

        with pytest.raises(APIAccessError):
            retry_on_rate_limit(mock_func)
        assert mock_func.call_count == 4
        assert mock_sleep.call_count == 3

    @patch('src.gist_client.retry_logic.time.sleep')
    def test_other_errors_propagate_immediately(self, mock_sleep):
        mock_func = MagicMock(side_effect=KeyError("boom"))

        with pytest.raises(KeyError):
            retry_on_rate_limit(mock_func)
        mock_func.assert_called_once()
        mock_sleep.assert_not_called()


class TestRetryAfter:
    """Test cases for honoring the Retry-After header."""

    @staticmethod
    def _limited(retry_after):
        error = Exception("API error")
        error.response = MagicMock()
        error.response.status_code = 429
        error.response.headers = {'Retry-After': retry_after}
        return error

    @patch('src.gist_client.retry_logic.time.sleep')
    def test_waits_for_retry_after_seconds(self, mock_sleep):
        mock_func = MagicMock(side_effect=[self._limited("7"), "ok"])

        assert retry_on_rate_limit(mock_func) == "ok"
        mock_sleep.assert_called_once_with(7)

    @patch('src.gist_client.retry_logic.time.sleep')
    def test_retry_after_is_capped(self, mock_sleep):
        mock_func = MagicMock(side_effect=[self._limited("3600"), "ok"])

        retry_on_rate_limit(mock_func)

        mock_sleep.assert_called_once_with(60)

    @patch('src.gist_client.retry_logic.time.sleep')
    def test_unparsable_retry_after_uses_backoff(self, mock_sleep):
        mock_func = MagicMock(side_effect=[self._limited("soon"), "ok"])

        retry_on_rate_limit(mock_func)

        mock_sleep.assert_called_once_with(1)
