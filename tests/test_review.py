"""Tests for the staged-change reviewer."""

from unittest.mock import MagicMock

from docwright.generators.ai_client import AIClient, Completion, TokenUsage
from docwright.generators.review import CodeReviewer, parse_review


def _client(reply: str) -> MagicMock:
    client = MagicMock(spec=AIClient)
    client.complete.return_value = Completion(
        text=reply, usage=TokenUsage(input_tokens=10, output_tokens=5), model="test"
    )
    return client


class TestParseReview:
    """Tests for parse_review."""

    def test_pass(self) -> None:
        result = parse_review("Looks good.\n\nVERDICT: PASS")
        assert result.passed is True
        assert result.feedback == "Looks good."
        assert result.verdict_found is True

    def test_fail(self) -> None:
        result = parse_review("Debug print left in app.py.\nVERDICT: FAIL\n")
        assert result.passed is False
        assert "Debug print" in result.feedback
        assert "VERDICT" not in result.feedback

    def test_case_insensitive(self) -> None:
        assert parse_review("verdict: fail").passed is False

    def test_last_verdict_wins(self) -> None:
        assert parse_review("VERDICT: FAIL\nOn reflection fine.\nVERDICT: PASS").passed

    def test_missing_verdict_passes(self) -> None:
        result = parse_review("No comments.")
        assert result.passed is True
        assert result.verdict_found is False


class TestCodeReviewer:
    """Tests for CodeReviewer.review."""

    def test_sends_diff_and_files(self) -> None:
        client = _client("Fine.\nVERDICT: PASS")
        result = CodeReviewer(client).review("+print('x')", ["app.py"])

        prompt = client.complete.call_args[0][0]
        assert "+print('x')" in prompt
        assert "app.py" in prompt
        assert client.complete.call_args[1]["system"]
        assert result.passed is True
        assert result.files == ["app.py"]

    def test_failing_review(self) -> None:
        result = CodeReviewer(_client("Broken.\nVERDICT: FAIL")).review("diff")
        assert result.passed is False
        assert result.files == []
