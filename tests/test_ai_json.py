"""Tests for lenient JSON extraction from model output"""
import pytest

from src.eventra.services.ai_json import (
    extract_json, extract_json_object, as_int, as_float, as_str, as_choice, as_list, round_half_up,
)
from src.eventra.services.errors import AIResponseParseError


class TestExtractJson:
    def test_strict_json(self):
        assert extract_json('{"score": 80}') == {"score": 80}

    def test_code_fence(self):
        text = 'Here you go:\n```json\n{"score": 72, "reasoning": "ok"}\n```'
        assert extract_json(text) == {"score": 72, "reasoning": "ok"}

    def test_object_wrapped_in_prose(self):
        text = 'Sure! Based on the data, {"score": 65, "confidence": 0.7} is my answer.'
        assert extract_json(text) == {"score": 65, "confidence": 0.7}

    def test_array_wrapped_in_prose(self):
        text = 'Suggested tasks: [{"title": "Book venue"}] hope this helps'
        assert extract_json(text, prefer="[") == [{"title": "Book venue"}]

    def test_object_after_bracketed_prose(self):
        text = 'Per criteria [1], here is the result: {"score": 80, "confidence": 0.7}'
        assert extract_json_object(text) == {"score": 80, "confidence": 0.7}

    def test_array_preferred_over_object_in_prose(self):
        text = 'Using {event} as context: [{"title": "Book venue"}]'
        assert extract_json(text, prefer="[") == [{"title": "Book venue"}]

    def test_falls_back_to_other_bracket(self):
        text = 'Options [a or b]: {"tasks": []}'
        assert extract_json(text, prefer="[") == {"tasks": []}

    def test_invalid_raises_with_truncated_preview(self):
        text = "no json here " * 40
        with pytest.raises(AIResponseParseError) as exc_info:
            extract_json(text)
        assert len(exc_info.value.raw_preview) == 200
        assert str(exc_info.value) == "Invalid AI response format"

    def test_object_required(self):
        with pytest.raises(AIResponseParseError):
            extract_json_object("[1, 2, 3]")


class TestCoercion:
    def test_as_int_clamps(self):
        assert as_int("140", 0, 0, 100) == 100
        assert as_int(-5, 0, 0, 100) == 0
        assert as_int("72.6", 0) == 73

    def test_as_int_default_on_garbage(self):
        assert as_int("high", 50) == 50
        assert as_int(None, 7) == 7

    def test_as_choice(self):
        assert as_choice("POSITIVE", ("positive", "neutral"), "neutral") == "positive"
        assert as_choice("ecstatic", ("positive", "neutral"), "neutral") == "neutral"

    def test_as_list(self):
        assert as_list("not a list") == []
        assert as_list(None, ["fallback"]) == ["fallback"]
        assert as_list(["a"]) == ["a"]

    def test_as_int_non_finite(self):
        assert as_int(float("inf"), 7) == 7
        assert as_int(float("nan"), 7) == 7
        assert as_int("1e999", 0, 0, 100) == 0

    def test_as_int_rounds_halves_up(self):
        assert as_int(12.5, 0) == 13
        assert as_int("0.5", 0) == 1

    def test_as_float_non_finite(self):
        assert as_float(float("inf"), 0.5) == 0.5
        assert as_float("0.8", 0.5) == 0.8

    def test_as_str(self):
        assert as_str(["fit", "budget"]) == ""
        assert as_str({"text": "x"}, "fallback") == "fallback"
        assert as_str("", "fallback") == "fallback"
        assert as_str(7, None) is None
        assert as_str("ok") == "ok"

    def test_round_half_up(self):
        assert round_half_up(12.5) == 13
        assert round_half_up(22.5) == 23
        assert round_half_up(22.4) == 22
