"""LayoutService: run the layout engine over the persisted thread."""

from __future__ import annotations

from typing import Any

from dthread.domain.errors import ThreadError, ValidationError
from dthread.domain.layout import Layout, LayoutDimensions, compute_layout
from dthread.domain.types import DisplayMode
from dthread.services.base import BaseService
from dthread.services.config import ConfigService
from dthread.services.result import ServiceResult
from dthread.services.telemetry import trace_span, traced


class LayoutService(BaseService):
    """Reads the configured order and every domain's items, then lays them out."""

    @traced
    def compute(self, display_mode: str | None = None) -> ServiceResult:
        op = "compute_layout"
        layout_cfg = self._store.settings.layout
        try:
            mode = self._parse_mode(display_mode or layout_cfg.display_mode)
            dims = LayoutDimensions(
                item_height=layout_cfg.item_height,
                padding=layout_cfg.padding,
                title_band_height=layout_cfg.title_band_height,
                container_width=layout_cfg.container_width,
                column_gap=layout_cfg.column_gap,
                indent=layout_cfg.indent,
            )
            with self._store.transaction() as txn, trace_span("load"):
                order = ConfigService(self._store).load_policy(txn).get_domain_order()
                items_by_domain = {domain: txn.list_items(domain) for domain in order}

            with trace_span("compute") as span:
                layout = compute_layout(order, items_by_domain, mode, dimensions=dims)
                if span:
                    span.annotate("nodes", len(layout.nodes))
                    span.annotate("edges", len(layout.edges))
        except ThreadError as exc:
            return self._failure(op, exc)

        data = layout.to_dict()
        data["summary"] = _summary(layout)
        return ServiceResult(ok=True, op=op, data=data)

    @staticmethod
    def _parse_mode(raw: str) -> DisplayMode:
        try:
            return DisplayMode(raw)
        except ValueError:
            allowed = ", ".join(m.value for m in DisplayMode)
            msg = f"Unknown display mode {raw!r}. Expected one of: {allowed}"
            raise ValidationError(msg, display_mode=raw) from None


def _summary(layout: Layout) -> list[dict[str, Any]]:
    """One row per container: domain, x offset, height, item count."""
    rows: list[dict[str, Any]] = []
    for container in layout.containers():
        payload = container.payload or {}
        rows.append(
            {
                "domain": payload.get("domain"),
                "x": container.position.x,
                "height": container.size.h,
                "items": len(layout.items_in(container.id)),
                "edges_out": sum(
                    1
                    for e in layout.edges
                    if e.source_id.startswith(f"{payload.get('domain')}::")
                ),
            }
        )
    return rows
