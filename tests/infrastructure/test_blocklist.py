"""Tests for the pattern-list block evaluator."""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from mailrelay.infrastructure.blocklist import AddressPattern, PatternBlockEvaluator, split_list


def _message(sender: str = "spam@bad.example", recipient: str = "me@example.com") -> SimpleNamespace:
    return SimpleNamespace(sender=sender, recipient=recipient, headers={})


def test_split_list_drops_blanks() -> None:
    assert split_list(" a@x, ,b@x,") == ["a@x", "b@x"]
    assert split_list(None) == []


class TestAddressPattern:
    def test_exact_match_is_case_insensitive(self) -> None:
        assert AddressPattern("Spam@Bad.Example").matches("spam@bad.example")

    def test_regex_match(self) -> None:
        assert AddressPattern(r".*@bad\.example$").matches("anyone@bad.example")
        assert not AddressPattern(r".*@bad\.example$").matches("anyone@good.example")

    def test_invalid_regex_matches_literally(self) -> None:
        pattern = AddressPattern("weird[@example.com")

        assert pattern.matches("weird[@example.com")
        assert not pattern.matches("weird@example.com")


class TestPatternBlockEvaluator:
    @pytest.mark.anyio
    async def test_blocks_matching_sender(self) -> None:
        evaluator = PatternBlockEvaluator(block_list=[r"@bad\.example"])

        assert await evaluator.evaluate(_message()) is True

    @pytest.mark.anyio
    async def test_blocks_matching_recipient(self) -> None:
        evaluator = PatternBlockEvaluator(block_list=["me@example.com"])

        assert await evaluator.evaluate(_message(sender="friend@good.example")) is True

    @pytest.mark.anyio
    async def test_white_list_wins(self) -> None:
        evaluator = PatternBlockEvaluator(block_list=[r"@bad\.example"], white_list=["spam@bad.example"])

        assert await evaluator.evaluate(_message()) is False

    @pytest.mark.anyio
    async def test_nothing_configured_blocks_nothing(self) -> None:
        assert await PatternBlockEvaluator().evaluate(_message()) is False

    def test_from_settings(self) -> None:
        settings = SimpleNamespace(block_list="a@x, .*@spam\\.com", white_list="boss@x")

        evaluator = PatternBlockEvaluator.from_settings(settings)

        assert [p.pattern for p in evaluator.block_list] == ["a@x", ".*@spam\\.com"]
        assert [p.pattern for p in evaluator.white_list] == ["boss@x"]
