"""Wiring of record store, nester and formatters for the CLI and web app."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cabinet_nesting.application.commands import RunNestingCommand
    from cabinet_nesting.contracts.protocols import RecordStoreProtocol
    from cabinet_nesting.infrastructure.bin_packing import NestingConfig, PanelNester
    from cabinet_nesting.infrastructure.formatters import (
        EdgeTapeReportFormatter,
        NestingJsonExporter,
        NestingReportFormatter,
    )


@dataclass
class ServiceFactory:
    """Builds the objects a nesting run needs.

    The record store is shared by every command the factory creates, so
    jobs written through one command can be read back through the store.
    Without an explicit store one is created on first use: a Supabase store
    when both ``SUPABASE_URL`` and ``SUPABASE_SERVICE_KEY`` are set in the
    environment, an in-memory one otherwise.

    Example:
        ```python
        factory = ServiceFactory(store=InMemoryRecordStore())
        command = factory.create_run_command(NestingConfig(allow_rotation=False))
        result = command.execute(panels, boards)
        ```
    """

    store: "RecordStoreProtocol | None" = None

    _report_formatter: "NestingReportFormatter | None" = field(
        default=None, init=False, repr=False
    )
    _json_exporter: "NestingJsonExporter | None" = field(
        default=None, init=False, repr=False
    )
    _edge_tape_formatter: "EdgeTapeReportFormatter | None" = field(
        default=None, init=False, repr=False
    )

    def get_record_store(self) -> "RecordStoreProtocol":
        if self.store is None:
            from cabinet_nesting.infrastructure.stores import (
                InMemoryRecordStore,
                SupabaseRecordStore,
            )

            url = os.getenv("SUPABASE_URL")
            key = os.getenv("SUPABASE_SERVICE_KEY")
            if url and key:
                self.store = SupabaseRecordStore.from_settings(url, key)
            else:
                self.store = InMemoryRecordStore()
        return self.store

    def create_nester(self, config: "NestingConfig | None" = None) -> "PanelNester":
        """A fresh nester per run; its configuration is per job."""
        from cabinet_nesting.infrastructure.bin_packing import PanelNester

        return PanelNester(config)

    def create_run_command(
        self, config: "NestingConfig | None" = None
    ) -> "RunNestingCommand":
        from cabinet_nesting.application.commands import RunNestingCommand

        return RunNestingCommand(
            store=self.get_record_store(),
            nester=self.create_nester(config),
        )

    def get_report_formatter(self) -> "NestingReportFormatter":
        if self._report_formatter is None:
            from cabinet_nesting.infrastructure.formatters import NestingReportFormatter

            self._report_formatter = NestingReportFormatter()
        return self._report_formatter

    def get_json_exporter(self) -> "NestingJsonExporter":
        if self._json_exporter is None:
            from cabinet_nesting.infrastructure.formatters import NestingJsonExporter

            self._json_exporter = NestingJsonExporter()
        return self._json_exporter

    def get_edge_tape_formatter(self) -> "EdgeTapeReportFormatter":
        if self._edge_tape_formatter is None:
            from cabinet_nesting.infrastructure.formatters import EdgeTapeReportFormatter

            self._edge_tape_formatter = EdgeTapeReportFormatter()
        return self._edge_tape_formatter


_factory: ServiceFactory | None = None


def get_factory() -> ServiceFactory:
    """Process-wide factory used by the CLI and the web dependencies."""
    global _factory
    if _factory is None:
        _factory = ServiceFactory()
    return _factory


def set_factory(factory: ServiceFactory | None) -> None:
    """Install ``factory`` as the process-wide factory."""
    global _factory
    _factory = factory


def reset_factory() -> None:
    """Drop the process-wide factory; the next ``get_factory`` builds a new one."""
    set_factory(None)
