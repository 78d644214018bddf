"""Metrics hook protocol and its no-op default.

The converter reports counters, a timing and a gauge for every call to
:meth:`MarkdownToBlocksConverter.convert`.  Without a configured backend a
:class:`NoopMetricsHook` receives them, so call sites never need to guard
against a missing hook.  Any object with matching ``increment``,
``timing`` and ``gauge`` methods can be passed as
``LogseqifyConfig(metrics=...)``.

Emitted metric names:

* ``logseqify.conversions_total``          -- counter, tagged by ``outcome``
* ``logseqify.conversion_fallbacks_total`` -- counter, tagged by ``strategy``
* ``logseqify.blocks_produced_total``      -- counter
* ``logseqify.conversion_duration_ms``     -- timing
* ``logseqify.forest_depth``               -- gauge
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class MetricsHook(Protocol):
    """Structural type for a metrics backend.

    *tags* maps string keys to string values; backends translate them
    into labels, tags or name suffixes as they see fit.
    """

    def increment(
        self,
        name: str,
        value: int = 1,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Add *value* to the counter *name*."""
        ...

    def timing(
        self,
        name: str,
        ms: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Record a duration of *ms* milliseconds."""
        ...

    def gauge(
        self,
        name: str,
        value: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Set the gauge *name* to *value*."""
        ...


class NoopMetricsHook:
    """Metrics backend that drops every data point."""

    __slots__ = ()

    def increment(
        self,
        name: str,
        value: int = 1,
        tags: dict[str, str] | None = None,
    ) -> None:
        pass

    def timing(
        self,
        name: str,
        ms: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        pass

    def gauge(
        self,
        name: str,
        value: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        pass
