"""Shared test fixtures for the logseqify test suite."""

from __future__ import annotations

from typing import Any

import pytest

from logseqify.config import LogseqifyConfig
from logseqify.converter.md_to_blocks import MarkdownToBlocksConverter


class RecordingMetricsHook:
    """A metrics backend that records all calls for assertion."""

    def __init__(self) -> None:
        self.increments: list[dict[str, Any]] = []
        self.timings: list[dict[str, Any]] = []
        self.gauges: list[dict[str, Any]] = []

    def increment(
        self,
        name: str,
        value: int = 1,
        tags: dict[str, str] | None = None,
    ) -> None:
        self.increments.append({"name": name, "value": value, "tags": tags})

    def timing(
        self,
        name: str,
        ms: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        self.timings.append({"name": name, "ms": ms, "tags": tags})

    def gauge(
        self,
        name: str,
        value: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        self.gauges.append({"name": name, "value": value, "tags": tags})

    def names(self) -> set[str]:
        return (
            {c["name"] for c in self.increments}
            | {t["name"] for t in self.timings}
            | {g["name"] for g in self.gauges}
        )


@pytest.fixture
def config() -> LogseqifyConfig:
    """Default test configuration."""
    return LogseqifyConfig()


@pytest.fixture
def converter(config: LogseqifyConfig) -> MarkdownToBlocksConverter:
    """Markdown-to-blocks converter using the default test config."""
    return MarkdownToBlocksConverter(config)


@pytest.fixture
def metrics() -> RecordingMetricsHook:
    """Metrics hook that records every data point."""
    return RecordingMetricsHook()
