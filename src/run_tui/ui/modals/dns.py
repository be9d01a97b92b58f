from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Vertical
from textual.widgets import Static

from ...core.navigation import Navigator
from ...models.domainmappings import DomainMapping
from .. import widgets
from .base import NavModal


class DnsRecordsModal(NavModal):
    def __init__(self, navigator: Navigator, mapping: DomainMapping) -> None:
        super().__init__(navigator, "modal-dns-records")
        self.mapping = mapping

    def compose(self) -> ComposeResult:
        with Vertical(classes="dialog"):
            yield Static(f"DNS records for {self.mapping.name}", classes="dialog-title", markup=False)
            yield widgets.ResourceTable(widgets.RECORD_COLUMNS, widgets.record_row)
            yield Static("Add these records at your DNS provider.", classes="dialog-help", markup=False)

    def on_mount(self) -> None:
        table = self.query_one(widgets.ResourceTable)
        table.load(self.mapping.records)
        table.focus()
